from django.urls import include, path

urlpatterns = [
    path('', include('timetable_planner.urls')),
]
