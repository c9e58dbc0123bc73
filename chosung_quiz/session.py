"""Interactive reveal state for one quiz."""
from __future__ import annotations

from collections.abc import Iterable

from chosung_quiz.models import QuizItem


class IndexOutOfRange(IndexError):
    def __init__(self, index: int, size: int):
        super().__init__(f"quiz item index {index} out of range for {size} items")
        self.index = index
        self.size = size


class QuizSession:
    """Generated items plus the set of indices whose answers are showing.

    Not thread-safe; one writer at a time. Generation results go through
    :meth:`begin_request` / :meth:`install` so that a slow response can never
    overwrite a newer quiz.
    """

    def __init__(self):
        self.items: tuple[QuizItem, ...] = ()
        self.subject: str = ""
        self.category: str = ""
        self._revealed: set[int] = set()
        self._latest_request = 0

    def __len__(self) -> int:
        return len(self.items)

    @property
    def revealed_indices(self) -> frozenset[int]:
        return frozenset(self._revealed)

    def replace(self, items: Iterable[QuizItem], subject: str = "", category: str = "") -> None:
        self.items = tuple(items)
        self.subject = subject
        self.category = category
        self._revealed = set()

    def begin_request(self) -> int:
        self._latest_request += 1
        return self._latest_request

    def is_current(self, request_id: int) -> bool:
        return request_id == self._latest_request

    def install(self, request_id: int, items: Iterable[QuizItem], subject: str = "", category: str = "") -> bool:
        """Replace the quiz with *items* unless a newer request was issued since.

        Returns whether the items were installed.
        """
        if not self.is_current(request_id):
            return False
        self.replace(items, subject=subject, category=category)
        return True

    def _check(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise IndexOutOfRange(index, len(self.items))

    def toggle(self, index: int) -> bool:
        """Flip the answer at *index*; returns the new revealed state."""
        self._check(index)
        if index in self._revealed:
            self._revealed.discard(index)
            return False
        self._revealed.add(index)
        return True

    def reveal_all(self) -> None:
        self._revealed = set(range(len(self.items)))

    def is_revealed(self, index: int) -> bool:
        self._check(index)
        return index in self._revealed

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "category": self.category,
            "count": len(self.items),
            "items": [
                {**item.to_dict(), "index": i, "revealed": i in self._revealed}
                for i, item in enumerate(self.items)
            ],
        }
