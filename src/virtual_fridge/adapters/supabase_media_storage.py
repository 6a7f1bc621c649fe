"""Supabase Storage bucket for user images."""

from dataclasses import dataclass

from supabase import Client

from virtual_fridge.services.media import MediaStorage


@dataclass
class SupabaseMediaStorage(MediaStorage):
    """Stores images in a Supabase Storage bucket."""

    client: Client
    bucket: str

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        """Upload content and return its public URL."""
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(path, content, {"content-type": content_type})
        return bucket.get_public_url(path)

    def list_names(self, prefix: str) -> list[str]:
        """Return object names at the bucket root starting with prefix."""
        entries = self.client.storage.from_(self.bucket).list(
            "", {"search": prefix}
        )
        return [
            entry["name"]
            for entry in entries or []
            if entry.get("name", "").startswith(prefix)
        ]

    def remove(self, paths: list[str]) -> None:
        """Delete the given objects."""
        self.client.storage.from_(self.bucket).remove(paths)
