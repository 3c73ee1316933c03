"""Upload converted CVs to Azure Blob Storage and mint read-only SAS links."""

from datetime import datetime, timedelta, timezone

from cm_calculators.config import SAS_EXPIRY_MINUTES
from cm_calculators.exceptions import StorageError
from cm_calculators.utils.logger import get_logger

logger = get_logger(__name__)

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_CONTENT_TYPE = "application/pdf"


class BlobStorage:
    """One container; created on first use if it does not exist."""

    def __init__(self, connection_string: str, container_name: str, service_client=None):
        if service_client is None:
            from azure.storage.blob import BlobServiceClient

            service_client = BlobServiceClient.from_connection_string(connection_string)
        self.service = service_client
        self.container_name = container_name
        self._container_ready = False

    def _container(self):
        from azure.core.exceptions import ResourceExistsError

        container = self.service.get_container_client(self.container_name)
        if not self._container_ready:
            try:
                container.create_container()
                logger.info("Created blob container %s", self.container_name)
            except ResourceExistsError:
                pass
            self._container_ready = True
        return container

    def _sas_url(self, blob_client) -> str:
        from azure.storage.blob import BlobSasPermissions, generate_blob_sas

        sas = generate_blob_sas(
            account_name=self.service.account_name,
            container_name=self.container_name,
            blob_name=blob_client.blob_name,
            account_key=self.service.credential.account_key,
            permission=BlobSasPermissions(read=True),
            expiry=datetime.now(timezone.utc) + timedelta(minutes=SAS_EXPIRY_MINUTES),
            protocol="https",
        )
        return f"{blob_client.url}?{sas}"

    def upload(self, blob_name: str, data: bytes, content_type: str) -> str:
        """Upload data and return a read-only HTTPS SAS URL valid for an hour."""
        from azure.storage.blob import ContentSettings

        try:
            blob_client = self._container().get_blob_client(blob_name)
            blob_client.upload_blob(data, overwrite=True, content_settings=ContentSettings(content_type=content_type))
            logger.info("Uploaded %s (%s bytes)", blob_name, len(data))
            return self._sas_url(blob_client)
        except Exception as e:
            logger.exception("Blob upload failed for %s", blob_name)
            raise StorageError(f"Failed to upload {blob_name}: {e}", cause=e) from e
