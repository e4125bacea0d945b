"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager
from db.store import EntityStore


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject mock services for testing.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, config is ignored.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)
        self.store = EntityStore(self.db_manager)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.transactions import TransactionService
        from services.goals import GoalService
        from services.limits import SpendingLimitService

        self.categories = CategoryService(self.store)
        self.transactions = TransactionService(self.store, self.categories)
        self.goals = GoalService(self.store, self.categories)
        self.limits = SpendingLimitService(self.store, self.categories)
