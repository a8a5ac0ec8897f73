"""Panel request validation and quantity expansion."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from sheetnest.domain.value_objects import (
    GrainDirection,
    PanelRequest,
    PlaceableUnit,
    RejectedPanel,
    RejectionReason,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationResult:
    """Output of the panel normalizer.

    Attributes:
        units: Individual placeable units, in request order.
        rejected: Requests that were excluded, with the reason.
    """

    units: tuple[PlaceableUnit, ...]
    rejected: tuple[RejectedPanel, ...]

    @property
    def expanded_quantity(self) -> int:
        return len(self.units)


class PanelNormalizer:
    """Validates panel requests and expands quantities into units.

    Invalid requests are flagged, never raised, so one bad row in a cut list
    does not abort the whole run.
    """

    def normalize(self, requests: Sequence[PanelRequest]) -> NormalizationResult:
        """Validate and expand a list of panel requests.

        Args:
            requests: Raw panel requests from the caller.

        Returns:
            NormalizationResult with expanded units and rejected requests.
        """
        units: list[PlaceableUnit] = []
        rejected: list[RejectedPanel] = []
        seen_ids: set[str] = set()
        issued_ids: set[str] = set()

        for request in requests:
            problem = self._find_problem(request)
            if problem is not None:
                logger.warning("Rejected panel '%s': %s", request.id, problem)
                rejected.append(
                    RejectedPanel(
                        panel_id=request.id,
                        reason=RejectionReason.INVALID_PANEL_REQUEST,
                        message=problem,
                    )
                )
                continue

            if request.id in seen_ids:
                logger.warning("Duplicate panel id '%s' in request list", request.id)
            seen_ids.add(request.id)

            units.extend(self._expand(request, issued_ids))

        logger.debug(
            "Normalized %d requests into %d units (%d rejected)",
            len(requests),
            len(units),
            len(rejected),
        )
        return NormalizationResult(units=tuple(units), rejected=tuple(rejected))

    def _find_problem(self, request: PanelRequest) -> str | None:
        """Return a human-readable problem description, or None if valid."""
        for name in ("length", "width", "thickness"):
            value = getattr(request, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                return f"{name} must be a finite number (got {value!r})"
            if value <= 0:
                return f"{name} must be positive (got {value!r})"

        if not isinstance(request.quantity, int) or request.quantity <= 0:
            return f"quantity must be a positive integer (got {request.quantity!r})"

        if not request.material or not request.material.strip():
            return "material must not be empty"

        try:
            GrainDirection.parse(request.grain)
        except ValueError:
            return f"grain must be one of none, length, width (got {request.grain!r})"

        return None

    def _expand(
        self, request: PanelRequest, issued_ids: set[str]
    ) -> list[PlaceableUnit]:
        """Expand a valid request of quantity n into n units.

        Unit ids already issued earlier in the run get a further "-k" suffix,
        with k the smallest integer from 2 that makes the id unique.
        """
        grain = GrainDirection.parse(request.grain)
        quantity = request.quantity
        units: list[PlaceableUnit] = []
        for i in range(quantity):
            if quantity == 1:
                unit_id = request.id
                label = request.label
            else:
                unit_id = f"{request.id}-{i + 1}"
                label = f"{request.label} ({i + 1}/{quantity})"
            unit_id = self._unique_id(unit_id, issued_ids)
            units.append(
                PlaceableUnit(
                    unit_id=unit_id,
                    panel_id=request.id,
                    label=label,
                    material=request.material.strip(),
                    thickness=float(request.thickness),
                    length=float(request.length),
                    width=float(request.width),
                    grain=grain,
                )
            )
        return units

    @staticmethod
    def _unique_id(unit_id: str, issued_ids: set[str]) -> str:
        candidate = unit_id
        suffix = 2
        while candidate in issued_ids:
            candidate = f"{unit_id}-{suffix}"
            suffix += 1
        if candidate != unit_id:
            logger.warning("Unit id '%s' already issued, using '%s'", unit_id, candidate)
        issued_ids.add(candidate)
        return candidate
