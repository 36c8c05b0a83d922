"""Quiz score value object."""

import math
from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True)
class QuizScore:
    """Correct/total tallies for one quiz run."""

    correct: int = 0
    total: int = 0

    def mark_correct(self) -> Self:
        return QuizScore(correct=self.correct + 1, total=self.total + 1)

    def mark_incorrect(self) -> Self:
        return QuizScore(correct=self.correct, total=self.total + 1)

    @property
    def percentage(self) -> int:
        """Percent correct, halves rounded up; 0 when nothing was answered."""
        if self.total == 0:
            return 0
        return math.floor(self.correct / self.total * 100 + 0.5)
