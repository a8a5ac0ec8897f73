"""Value objects for the sheet nesting domain.

All dimensions are in millimetres. Sheet coordinates have their origin at the
bottom-left corner of the stock sheet; x grows along the sheet length and y
grows along the sheet width.

Request-side types (``PanelRequest``) are deliberately permissive so that bad
input can be flagged by the normalizer instead of raising. Everything produced
by the engine is a frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# System defaults for stock material
DEFAULT_SHEET_LENGTH: float = 2440.0
DEFAULT_SHEET_WIDTH: float = 1220.0
MIN_REMNANT_SIZE: float = 200.0


class GrainDirection(str, Enum):
    """Grain direction constraint for a panel.

    Attributes:
        NONE: No grain constraint, the panel can rotate freely.
        LENGTH: Grain runs along the panel length.
        WIDTH: Grain runs along the panel width.
    """

    NONE = "none"
    LENGTH = "length"
    WIDTH = "width"

    @classmethod
    def parse(cls, value: "GrainDirection | str | None") -> "GrainDirection":
        """Normalise a grain value, mapping missing values to NONE."""
        if value is None:
            return cls.NONE
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower() or "none")


class OptimizationMode(str, Enum):
    """Fidelity of an optimization run."""

    ESTIMATION = "ESTIMATION"
    PRODUCTION = "PRODUCTION"


class StockSource(str, Enum):
    """How the stock sheet for a material group was resolved."""

    EXPLICIT = "explicit"
    MATCHED = "matched"
    DEFAULT = "default"


class RejectionReason(str, Enum):
    """Why a panel request was excluded before expansion."""

    INVALID_PANEL_REQUEST = "InvalidPanelRequest"


class UnplaceableReason(str, Enum):
    """Why an individual unit could not be placed on any sheet."""

    EXCEEDS_SHEET_SIZE = "ExceedsSheetSize"
    GRAIN_CONFLICT = "GrainConflict"
    COMPUTATION_ABORTED = "ComputationAborted"


class CutType(str, Enum):
    """Straight saw cut orientation."""

    RIP = "rip"
    CROSSCUT = "crosscut"


@dataclass(frozen=True)
class PanelRequest:
    """A part type requested by the caller, before quantity expansion.

    No validation happens here; ``PanelNormalizer`` decides whether the
    request is usable.
    """

    id: str
    label: str
    material: str
    thickness: float
    length: float
    width: float
    quantity: int = 1
    grain: GrainDirection = GrainDirection.NONE


@dataclass(frozen=True)
class PlaceableUnit:
    """One physical instance of a panel request.

    Attributes:
        unit_id: Unique id of this instance within a run.
        panel_id: Id of the originating PanelRequest.
        label: Display label, suffixed with "(i/n)" for multi-quantity panels.
        material: Material name.
        thickness: Material thickness in mm.
        length: Extent along the sheet length axis when not rotated.
        width: Extent along the sheet width axis when not rotated.
        grain: Grain constraint inherited from the request.
    """

    unit_id: str
    panel_id: str
    label: str
    material: str
    thickness: float
    length: float
    width: float
    grain: GrainDirection = GrainDirection.NONE

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Unit dimensions must be positive")

    @property
    def area(self) -> float:
        return self.length * self.width

    @property
    def can_rotate(self) -> bool:
        """Only grain-free units may be turned 90 degrees."""
        return self.grain == GrainDirection.NONE


@dataclass(frozen=True)
class StockSheetSpec:
    """Stock sheet definition for a material.

    Attributes:
        material: Material name the sheet is stocked as.
        length: Sheet length in mm (x axis).
        width: Sheet width in mm (y axis).
        thickness: Sheet thickness in mm.
        cost_per_sheet: Purchase cost of one sheet.
    """

    material: str
    length: float = DEFAULT_SHEET_LENGTH
    width: float = DEFAULT_SHEET_WIDTH
    thickness: float = 18.0
    cost_per_sheet: float = 0.0

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Sheet length must be positive")
        if self.width <= 0:
            raise ValueError("Sheet width must be positive")
        if self.thickness <= 0:
            raise ValueError("Sheet thickness must be positive")
        if self.cost_per_sheet < 0:
            raise ValueError("Cost per sheet must be non-negative")

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class FreeRegion:
    """An empty rectangle on a sheet still available for placement."""

    x: float
    y: float
    length: float
    width: float

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Region coordinates must be non-negative")
        if self.length <= 0 or self.width <= 0:
            raise ValueError("Region dimensions must be positive")

    @property
    def area(self) -> float:
        return self.length * self.width

    @property
    def right(self) -> float:
        return self.x + self.length

    @property
    def top(self) -> float:
        return self.y + self.width


@dataclass(frozen=True)
class Placement:
    """A unit placed at a position on a sheet.

    ``length`` and ``width`` are the placed extents along the sheet x and y
    axes, so they are already swapped when ``rotated`` is true.
    """

    unit_id: str
    panel_id: str
    label: str
    x: float
    y: float
    length: float
    width: float
    rotated: bool = False
    grain: GrainDirection = GrainDirection.NONE

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.rotated and self.grain != GrainDirection.NONE:
            raise ValueError(
                f"Unit '{self.unit_id}' has grain '{self.grain.value}' and cannot be rotated"
            )

    @property
    def area(self) -> float:
        return self.length * self.width

    @property
    def right_edge(self) -> float:
        return self.x + self.length

    @property
    def top_edge(self) -> float:
        return self.y + self.width

    @property
    def grain_aligned(self) -> bool:
        """True when the part keeps its grain edge on the sheet length axis."""
        return not self.rotated or self.grain == GrainDirection.NONE


@dataclass(frozen=True)
class Sheet:
    """One stock sheet opened during packing, with its final layout.

    Attributes:
        sheet_id: Result-wide identifier ("sheet-N").
        sheet_number: 1-based number across the whole result.
        material: Material name of the group the sheet belongs to.
        thickness: Material thickness in mm.
        stock: Stock sheet definition used for this sheet.
        placements: Placements in the order they were made.
        free_regions: Rectangles still free after packing completed.
        kerf_loss_area: Area consumed by saw kerf and unusable slivers.
    """

    sheet_id: str
    sheet_number: int
    material: str
    thickness: float
    stock: StockSheetSpec
    placements: tuple[Placement, ...]
    free_regions: tuple[FreeRegion, ...] = ()
    kerf_loss_area: float = 0.0

    def __post_init__(self) -> None:
        if self.sheet_number < 1:
            raise ValueError("Sheet number must be 1 or greater")

    @property
    def length(self) -> float:
        return self.stock.length

    @property
    def width(self) -> float:
        return self.stock.width

    @property
    def area(self) -> float:
        return self.stock.area

    @property
    def used_area(self) -> float:
        return sum(p.area for p in self.placements)

    @property
    def free_area(self) -> float:
        return sum(r.area for r in self.free_regions)

    @property
    def wasted_area(self) -> float:
        return self.area - self.used_area

    @property
    def utilization(self) -> float:
        """Percentage of the sheet covered by parts, clamped to 0-100."""
        if self.area <= 0:
            return 0.0
        return max(0.0, min(100.0, self.used_area / self.area * 100))

    @property
    def piece_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class WasteRegion:
    """A free rectangle left on a sheet after packing."""

    sheet_id: str
    x: float
    y: float
    length: float
    width: float
    reusable: bool = False

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class CutOperation:
    """One straight saw cut in the shop cutting order for a sheet."""

    sheet_id: str
    sequence: int
    type: CutType
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    length: float
    resulting_part_ids: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.sequence < 1:
            raise ValueError("Cut sequence numbers start at 1")

    @property
    def cut_id(self) -> str:
        return f"{self.sheet_id}-cut-{self.sequence}"


@dataclass(frozen=True)
class RejectedPanel:
    """A panel request excluded before expansion."""

    panel_id: str
    reason: RejectionReason
    message: str


@dataclass(frozen=True)
class UnplaceableUnit:
    """A valid unit that no sheet could take."""

    unit_id: str
    panel_id: str
    label: str
    material: str
    reason: UnplaceableReason
    message: str


@dataclass(frozen=True)
class MaterialGroup:
    """Units sharing a material and thickness, with their resolved stock.

    Attributes:
        material: Material name.
        thickness: Material thickness in mm.
        stock: Stock sheet used for every sheet of this group.
        stock_source: Which resolution rule produced ``stock``.
        units: Units that fit the stock in at least one legal orientation.
    """

    material: str
    thickness: float
    stock: StockSheetSpec
    stock_source: StockSource
    units: tuple[PlaceableUnit, ...] = field(default_factory=tuple)

    @property
    def key(self) -> tuple[str, float]:
        return (self.material, self.thickness)

    @property
    def unit_area(self) -> float:
        return sum(u.area for u in self.units)


@dataclass(frozen=True)
class MaterialSummary:
    """Sheet usage and cost for one material group."""

    material: str
    thickness: float
    sheet_count: int
    stock: StockSheetSpec
    stock_source: StockSource
    used_area: float
    sheet_area: float
    cost: float

    @property
    def utilization(self) -> float:
        if self.sheet_area <= 0:
            return 0.0
        return max(0.0, min(100.0, self.used_area / self.sheet_area * 100))
