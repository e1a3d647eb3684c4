from django.urls import path
from .views import GenerateTimetableView, ValidateTimetableView

urlpatterns = [
    path('api/v1/timetables/generate/', GenerateTimetableView.as_view(), name='generate-timetables'), # generates and ranks combinations
    path('api/v1/timetables/validate/', ValidateTimetableView.as_view(), name='validate-timetable'), # audits a single combination
]
