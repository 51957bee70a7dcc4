"""
Files Search Provider - Searches documents on the device via the "f" prefix.

Like the contacts provider, the actual file query is done by a callable
supplied by the host application.
"""

from dataclasses import dataclass
from typing import Callable

from ..registry import ProviderDefinition
from ..router import ResultItem, SearchProvider

FILES_PERMISSION = "android.permission.MANAGE_EXTERNAL_STORAGE"

FILES_DEFINITION = ProviderDefinition(
    provider_id="files",
    name="Files",
    prefix="f",
    description="Search all files on device",
    icon="folder-documents",
    color="#FF9800",
)


@dataclass(frozen=True)
class FileDocument:
    file_id: int
    name: str
    mime_type: str = "application/octet-stream"
    size: int = 0
    folder_path: str = ""


def format_size(size: int) -> str:
    """Human-readable file size (e.g. 1.5 MB)."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ("KB", "MB"):
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


class FilesSearchProvider(SearchProvider):

    def __init__(self, lookup: Callable[[str], list[FileDocument]],
                 has_permission: Callable[[], bool] = lambda: True):
        self.lookup = lookup
        self.has_permission = has_permission

    @property
    def definition(self) -> ProviderDefinition:
        return FILES_DEFINITION

    def search(self, query: str) -> list[ResultItem]:
        if not self.has_permission():
            return [ResultItem(
                title="Allow file access in Settings to search all files",
                description="Grant Permission",
                icon="dialog-password",
                result_type="permission",
                item=FILES_PERMISSION,
            )]

        term = query.strip()
        if not term:
            return [ResultItem(
                title="Type to search all files",
                icon=FILES_DEFINITION.icon,
                result_type="hint",
            )]

        documents = self.lookup(term)
        if not documents:
            return [ResultItem(
                title=f'No files found for "{term}"',
                icon="dialog-question",
                result_type="hint",
            )]

        return [
            ResultItem(
                title=doc.name,
                description=" · ".join(p for p in (doc.folder_path, format_size(doc.size)) if p),
                icon="text-x-generic",
                result_type="file",
                item=doc,
            )
            for doc in documents
        ]
