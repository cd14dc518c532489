from dataclasses import dataclass
from typing import Sequence, Union

from td_canvas.errors import ConstraintError


@dataclass(frozen=True)
class FlexLength:
    length: int


@dataclass(frozen=True)
class FlexPercentage:
    percent: float

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise ConstraintError(
                "Flexible percentage must be between 0 and 100",
                context={"percent": self.percent},
            )


FlexBound = Union[FlexLength, FlexPercentage]


@dataclass(frozen=True)
class TableColumn:
    header: str
    desired_width: int
    upper_bound: FlexBound | None = None  # None means inflexible
    is_sorting_column: bool = False
    is_hidden: bool = False

    def max_width(self, total_width: int) -> int:
        """Widest this column may grow to inside ``total_width`` cells."""
        if isinstance(self.upper_bound, FlexLength):
            return max(self.desired_width, self.upper_bound.length)
        if isinstance(self.upper_bound, FlexPercentage):
            return max(self.desired_width, int(total_width * self.upper_bound.percent / 100))
        return self.desired_width


TableRow = Sequence[str]
