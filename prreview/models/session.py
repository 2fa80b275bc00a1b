"""Review session for one pull request."""

from pydantic import BaseModel


class ReviewSession(BaseModel):
    """Per-PR review session.

    The model-side session is addressed by chat_id only, so the same PR
    maps to the same session across handler invocations.
    """

    owner: str
    repo: str
    pull_number: int
    title: str = ""

    @property
    def chat_id(self) -> str:
        return f"PR#{self.pull_number}"

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"
