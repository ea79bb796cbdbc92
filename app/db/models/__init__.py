from app.db.models.spin_codes import SpinCode
from app.db.models.spin_results import SpinResult

__all__ = [
    "SpinCode",
    "SpinResult",
]
