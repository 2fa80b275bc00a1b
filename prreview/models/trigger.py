"""Normalized review trigger produced from an inbound webhook event."""

from enum import Enum

from pydantic import BaseModel


class TriggerKind(str, Enum):
    """What a webhook event asks the bot to do."""

    IGNORE = "ignore"
    NEW_REVIEW = "new_review"
    UPDATE_REVIEW = "update_review"


class ReviewTrigger(BaseModel):
    """Tagged trigger: Ignore, NewReview or UpdateReview with PR fields."""

    kind: TriggerKind
    title: str = ""
    pull_number: int = 0
    author: str = ""

    @classmethod
    def ignore(cls) -> "ReviewTrigger":
        return cls(kind=TriggerKind.IGNORE)

    @classmethod
    def new_review(cls, title: str, pull_number: int, author: str = "") -> "ReviewTrigger":
        return cls(kind=TriggerKind.NEW_REVIEW, title=title, pull_number=pull_number, author=author)

    @classmethod
    def update_review(cls, title: str, pull_number: int, author: str = "") -> "ReviewTrigger":
        return cls(kind=TriggerKind.UPDATE_REVIEW, title=title, pull_number=pull_number, author=author)

    @property
    def is_ignored(self) -> bool:
        return self.kind is TriggerKind.IGNORE
