"""Bridge fee selection: price resolution, fee reconciliation and solvency."""

from bridge_fees.selector import FeeSelector, FeeSelectorState, SelectorStatus

__version__ = "0.1.0"
__all__ = ["FeeSelector", "FeeSelectorState", "SelectorStatus", "__version__"]
