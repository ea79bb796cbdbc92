from app.economy.spin.outcomes import OutcomeSelector
from app.economy.spin.service import SpinLedger

__all__ = [
    "OutcomeSelector",
    "SpinLedger",
]
