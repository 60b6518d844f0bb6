"""Supabase Storage implementation for listing photos."""

from dataclasses import dataclass

from supabase import Client

from donation_board.adapters.supabase_errors import remote_call
from donation_board.services.listings import PhotoStorage


@dataclass
class SupabasePhotoStorage(PhotoStorage):
    """Store listing photos in a public Supabase bucket."""

    client: Client
    bucket: str = "item-photos"

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload a photo and return its public URL."""
        bucket = self.client.storage.from_(self.bucket)
        with remote_call("upload photo"):
            bucket.upload(path, content, {"content-type": content_type})
        return bucket.get_public_url(path)

    def remove(self, paths: list[str]) -> None:
        """Remove photos by object path."""
        with remote_call("remove photos"):
            self.client.storage.from_(self.bucket).remove(paths)

    def path_from_url(self, url: str) -> str | None:
        """Return the object path for a public URL in this bucket."""
        marker = f"/object/public/{self.bucket}/"
        _, found, path = url.partition(marker)
        if not found:
            return None
        return path.split("?", maxsplit=1)[0] or None
