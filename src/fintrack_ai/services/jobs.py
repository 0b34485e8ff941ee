from concurrent.futures import Executor, Future

from fintrack_ai.logger import get_logger
from fintrack_ai.manager import CategorizerService
from fintrack_ai.storage.transactions import TransactionRepository

logger = get_logger(__name__)


class CategorizationJobQueue:
    """
    Runs categorization for stored transactions off the request path.

    Without an executor jobs run inline, which keeps tests deterministic.
    """

    def __init__(
        self,
        service: CategorizerService,
        transactions: TransactionRepository,
        executor: Executor | None = None,
    ):
        self.service = service
        self.transactions = transactions
        self.executor = executor

    def dispatch(self, transaction_id: int, force_recategorize: bool = False) -> Future | None:
        if self.executor is None:
            self.run(transaction_id, force_recategorize)
            return None
        logger.debug("[JOB] Queued categorization for transaction %s.", transaction_id)
        return self.executor.submit(self.run, transaction_id, force_recategorize)

    def run(self, transaction_id: int, force_recategorize: bool = False) -> None:
        try:
            transaction = self.transactions.get(transaction_id)
            if transaction is None:
                logger.warning("[JOB] Transaction %s no longer exists.", transaction_id)
                return
            if transaction.category_id and not force_recategorize:
                logger.info(
                    "[JOB] Transaction %s already has category %s, recategorization not forced.",
                    transaction_id,
                    transaction.category_id,
                )
                return

            category = self.service.categorize_transaction(transaction)
            if category is not None:
                updated = transaction.model_copy(
                    update={"category_id": category.id, "categorization_status": "completed"}
                )
                self.transactions.save_transaction(updated)
                logger.info(
                    "[JOB] Transaction %s categorized as '%s' (id=%s).",
                    transaction_id,
                    category.name,
                    category.id,
                )
            else:
                # Completed either way so clients stop polling.
                self.transactions.save_transaction(
                    transaction.model_copy(update={"categorization_status": "completed"})
                )
                logger.warning("[JOB] Could not categorize transaction %s: '%s'", transaction_id, transaction.description)
        except Exception:
            logger.exception("[JOB] Error categorizing transaction %s.", transaction_id)

    def shutdown(self) -> None:
        if self.executor is not None:
            self.executor.shutdown(wait=True)
