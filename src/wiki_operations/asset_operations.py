"""Asset operations for Wiki.js."""

import logging
import os
from typing import Any, List, Optional

from ..wikijs_client.api_wrapper import GraphQLClient
from ..wikijs_client.validation import validate_id
from . import queries
from .models import Asset, OperationResult
from .responses import check_result, section

logger = logging.getLogger(__name__)


class AssetOperations:
    """List, upload and delete media assets."""

    def __init__(self, api: Optional[GraphQLClient] = None):
        self.api = api or GraphQLClient()

    def list_assets(self, folder: str = '', limit: int = 50) -> List[Asset]:
        """List assets, filtered client-side by filename prefix.

        Args:
            folder: Keep assets whose filename starts with this prefix
            limit: Maximum number of assets returned
        """
        data = self.api.execute(queries.list_assets_query())
        assets = [Asset.from_api(item) for item in section(data, 'assets', 'list') or []]

        if folder:
            assets = [a for a in assets if a.filename.startswith(folder)]

        return assets[:limit]

    def upload_asset(self, file_path: str, folder: str = '', rename: Optional[str] = None) -> Any:
        """Upload a local file as an asset.

        Args:
            file_path: File to upload
            folder: Target folder name. The upload endpoint stores files in
                    the root folder, so a non-empty value is only logged.
            rename: Stored filename (default: the file's base name)

        Returns:
            The upload endpoint's decoded response body

        Raises:
            FileNotFoundError: If file_path does not exist
            TransportError: If the upload request fails
        """
        filename = rename or os.path.basename(file_path)
        if folder:
            logger.warning(
                f"Upload endpoint ignores folder '{folder}'; storing {filename} in the root folder"
            )
        result = self.api.upload(file_path, filename=filename)
        logger.info(f"Uploaded {file_path} as {filename}")
        return result

    def delete_asset(self, asset_id: Any) -> OperationResult:
        valid_id = validate_id(asset_id)
        data = self.api.execute(queries.delete_asset_mutation(valid_id))
        outcome = check_result(
            section(data, 'assets', 'deleteAsset'), 'delete_asset', 'Failed to delete asset'
        )
        logger.info(f"Deleted asset {valid_id}")
        return outcome
