# apps/impressions/views.py
from rest_framework.decorators import api_view
from rest_framework.response import Response
from rest_framework import status
from .exceptions import ArchiveError, ImpressionValidationError, MetadataIndexError
from .serializers import ImpressionSerializer
from .services import get_impression_service
import logging

logger = logging.getLogger(__name__)


@api_view(['GET', 'POST'])
def impressions(request):
    """List recorded impressions or record a new one"""
    if request.method == 'POST':
        return record_impression(request)
    return list_impressions(request)


def record_impression(request):
    service = get_impression_service()
    try:
        service.record(request.data)
    except ImpressionValidationError as e:
        return Response(e.errors, status=status.HTTP_400_BAD_REQUEST)
    except (ArchiveError, MetadataIndexError) as e:
        logger.error(f"Error recording impression: {str(e)}")
        return Response({
            'error': str(e)
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response({'message': 'Impression recorded.'}, status=status.HTTP_200_OK)


def list_impressions(request):
    service = get_impression_service()
    try:
        records = service.list_all()
    except MetadataIndexError as e:
        logger.error(f"Error listing impressions: {str(e)}")
        return Response({
            'error': str(e)
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(ImpressionSerializer(records, many=True).data)
