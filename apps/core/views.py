"""Direct access to the file storage service."""

from __future__ import annotations

from rest_framework import permissions, serializers, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .storage import delete_files


class DeleteUploadSerializer(serializers.Serializer):
    image_key = serializers.CharField(max_length=255)


class DeleteUploadView(APIView):
    """Delete an uploaded picture, e.g. when a form discards it before saving."""

    permission_classes = [permissions.IsAuthenticated]
    serializer_class = DeleteUploadSerializer

    def post(self, request):  # type: ignore
        serializer = DeleteUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = delete_files(serializer.validated_data["image_key"])
        return Response(result, status=status.HTTP_200_OK)
