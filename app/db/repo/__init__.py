from app.db.repo.spin_codes_repo import SpinCodesRepo
from app.db.repo.spin_results_repo import SpinResultsRepo

__all__ = [
    "SpinCodesRepo",
    "SpinResultsRepo",
]
