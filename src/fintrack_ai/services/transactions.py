from fintrack_ai.domain.rules import shortcut_category
from fintrack_ai.logger import get_logger
from fintrack_ai.models import ParsedTransactionCandidate, Transaction, TransactionResult, TransactionType
from fintrack_ai.storage.transactions import TransactionRepository

from .category_resolver import CategoryResolver
from .jobs import CategorizationJobQueue

logger = get_logger(__name__)


class TransactionEntryService:
    """Persists income/outcome transactions and schedules their categorization."""

    def __init__(self, repository: TransactionRepository, resolver: CategoryResolver, jobs: CategorizationJobQueue):
        self.repository = repository
        self.resolver = resolver
        self.jobs = jobs

    def record(self, transaction: Transaction, category_name: str | None = None) -> Transaction:
        """
        Store a transaction; a known category completes it at once, anything else goes to the job queue.

        ``category_name`` is a category already picked upstream (the chat parser pre-assigns
        keyword shortcuts); without one the description is checked against the shortcut rules.
        """
        shortcut = category_name or shortcut_category(transaction.description)
        if shortcut and transaction.category_id is None:
            category = self.resolver.find_or_create(shortcut, transaction.user_id)
            transaction = transaction.model_copy(
                update={"category_id": category.id, "categorization_status": "completed"}
            )
            stored = self.repository.create(transaction)
            logger.info("[TRANSACTION] Stored %s #%s with keyword category '%s'.", stored.type, stored.id, category.name)
            return stored

        stored = self.repository.create(transaction)
        logger.info("[TRANSACTION] Stored %s #%s, dispatching categorization.", stored.type, stored.id)
        self.jobs.dispatch(stored.id)
        return stored

    def create(
        self,
        candidate: ParsedTransactionCandidate,
        kind: TransactionType,
        account_id: int,
        user_id: int | None = None,
    ) -> TransactionResult:
        try:
            transaction = Transaction(
                user_id=user_id,
                account_id=account_id,
                type=kind,
                description=candidate.description,
                amount=candidate.amount,
                currency_id=candidate.currency_id,
                transaction_date=candidate.date,
            )
            stored = self.record(transaction, candidate.category_name)
        except Exception as exc:
            logger.error("[TRANSACTION] Transaction creation failed for '%s': %s", candidate.description, exc)
            return TransactionResult(success=False, error=str(exc), data=candidate)
        return TransactionResult(success=True, type=kind, transaction=stored)

    def recategorize(self, transaction_id: int) -> Transaction | None:
        transaction = self.repository.get(transaction_id)
        if transaction is None:
            return None
        self.jobs.dispatch(transaction_id, force_recategorize=True)
        return self.repository.get(transaction_id)
