import time

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import TimetableError
from .logging_config import loggers
from .main import GENERATION_TIMEOUT_SECONDS, MAX_RESULTS, generate_timetables
from .result_validator import ValidationReport, combination_warnings, validate_combination
from .serializers import GenerateTimetableSerializer, ValidateTimetableSerializer

logger = loggers['views']


def _generation_setting(name, default):
    return getattr(settings, "TIMETABLE_GENERATION", {}).get(name, default)


class GenerateTimetableView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        logger.info("Received timetable generation request")
        serializer = GenerateTimetableSerializer(data=request.data)

        if not serializer.is_valid():
            logger.warning(f"Invalid input data: {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        modules, filters = serializer.to_request()
        started = time.monotonic()
        try:
            result = generate_timetables(
                modules,
                filters,
                max_results=_generation_setting("MAX_RESULTS", MAX_RESULTS),
                timeout=_generation_setting("TIMEOUT_SECONDS", GENERATION_TIMEOUT_SECONDS),
            )
        except TimetableError as e:
            logger.error(f"Failed after {time.monotonic() - started:.3f}s: {e.message}")
            return Response(
                {"success": False, "error": e.message, "details": e.details},
                status=e.status_code,
            )
        except Exception as e:
            logger.exception(f"Error generating timetables: {str(e)}")
            return Response(
                {"success": False, "error": "Failed to generate timetable combinations"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info(
            f"Generated {result.total_combinations} combinations in {time.monotonic() - started:.3f}s"
        )
        return Response({"success": True, "data": result.to_dict()}, status=status.HTTP_200_OK)


class ValidateTimetableView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = ValidateTimetableSerializer(data=request.data)

        if not serializer.is_valid():
            logger.warning(f"Invalid timetable for validation: {serializer.errors}")
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        combination, filters = serializer.to_request()
        errors = validate_combination(combination, filters, label="Timetable")
        report = ValidationReport(
            valid=not errors, errors=errors, warnings=combination_warnings(combination)
        )

        return Response({"success": True, "data": report.to_dict()}, status=status.HTTP_200_OK)
