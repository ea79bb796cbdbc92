from app.economy.spin import OutcomeSelector, SpinLedger

__all__ = [
    "OutcomeSelector",
    "SpinLedger",
]
