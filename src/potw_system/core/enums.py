from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Voting session state: OPEN -> CLOSED, one-way."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class VoteValue(str, Enum):
    """Company values a vote can be tagged with."""

    THINK_DIFFERENT = "THINK DIFFERENT AND LOOK TO THE HORIZON"
    LEARN_TEACH_REPEAT = "LEARN, TEACH, REPEAT"
    WALK_THE_TALK = "WALK THE TALK"
    FAIL_FAST = "EXECUTE, FAIL FAST, FAIL DIFFERENTLY"
    ENJOY = "WE ENJOY WHAT WE DO"
    CUSTOMER_FIRST = "CUSTOMER FIRST"

    @property
    def short_label(self) -> str:
        return _SHORT_LABELS[self]


_SHORT_LABELS = {
    VoteValue.THINK_DIFFERENT: "Think Different",
    VoteValue.LEARN_TEACH_REPEAT: "Learn, Teach",
    VoteValue.WALK_THE_TALK: "Walk the Talk",
    VoteValue.FAIL_FAST: "Fail Fast",
    VoteValue.ENJOY: "Enjoy",
    VoteValue.CUSTOMER_FIRST: "Customer First",
}
