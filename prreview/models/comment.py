"""Comment on an issue or PR."""

from pydantic import BaseModel


class Comment(BaseModel):
    """Comment on an issue or PR (candidate for the tracked review comment)."""

    id: int
    body: str = ""
    author: str = ""

    def starts_with_any(self, markers: tuple[str, ...]) -> bool:
        """True if the body starts with one of the given markers."""
        return self.body.startswith(markers)
