"""Pytest configuration and shared fixtures for sheetnest tests."""

from __future__ import annotations

import pytest

from sheetnest.application import OptimizationOptions
from sheetnest.domain.value_objects import GrainDirection, PanelRequest


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared panel fixtures
# =============================================================================


def make_panel(
    panel_id: str = "p1",
    length: float = 600.0,
    width: float = 400.0,
    quantity: int = 1,
    material: str = "18mm MDF",
    thickness: float = 18.0,
    grain: GrainDirection | str = GrainDirection.NONE,
    label: str | None = None,
) -> PanelRequest:
    """Build a PanelRequest with sensible defaults."""
    return PanelRequest(
        id=panel_id,
        label=label if label is not None else panel_id.upper(),
        material=material,
        thickness=thickness,
        length=length,
        width=width,
        quantity=quantity,
        grain=grain,  # type: ignore[arg-type]
    )


@pytest.fixture
def panel_factory():
    """Factory fixture for PanelRequest objects."""
    return make_panel


@pytest.fixture
def production_options() -> OptimizationOptions:
    """Default PRODUCTION options with a 4mm kerf."""
    return OptimizationOptions()


@pytest.fixture
def kitchen_panels() -> list[PanelRequest]:
    """A small mixed cut list across two materials."""
    return [
        make_panel("side", 720, 560, quantity=2, grain=GrainDirection.LENGTH),
        make_panel("shelf", 764, 540, quantity=3),
        make_panel("top", 800, 580),
        make_panel("back", 780, 716, material="6mm Hardboard", thickness=6.0),
        make_panel("door", 715, 397, quantity=2, material="Oak Veneer", grain="length"),
    ]
