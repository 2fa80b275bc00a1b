"""File changed in a pull request and its review outcome."""

from pydantic import BaseModel

COMMIT_REF_LENGTH = 40


class ChangedFile(BaseModel):
    """File changed in a pull request (one review run only, not persisted)."""

    filename: str
    blob_url: str = ""
    contents_url: str = ""

    @property
    def ref(self) -> str | None:
        """Commit hash taken from the trailing 40 characters of contents_url.

        None when contents_url is too short to carry one.
        """
        if len(self.contents_url) < COMMIT_REF_LENGTH:
            return None
        return self.contents_url[-COMMIT_REF_LENGTH:]


class FileReview(BaseModel):
    """Review outcome for one file: model text or "N/A"."""

    filename: str
    blob_url: str
    outcome: str
