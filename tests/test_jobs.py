from concurrent.futures import ThreadPoolExecutor
from datetime import date
from unittest.mock import MagicMock

import pytest

from fintrack_ai.models import Category, ParsedTransactionCandidate, Transaction
from fintrack_ai.services.category_resolver import CategoryResolver
from fintrack_ai.services.jobs import CategorizationJobQueue
from fintrack_ai.services.transactions import TransactionEntryService
from fintrack_ai.storage.categories import CategoryRepository
from fintrack_ai.storage.transactions import TransactionRepository


@pytest.fixture
def repo() -> TransactionRepository:
    return TransactionRepository()


@pytest.fixture
def service() -> MagicMock:
    mock = MagicMock()
    mock.categorize_transaction.return_value = Category(id=9, name="Makanan")
    return mock


def store(repo: TransactionRepository, **overrides) -> Transaction:
    values = {"account_id": 1, "description": "Makan siang", "amount": 25000}
    values.update(overrides)
    return repo.create(Transaction(**values))


def test_job_categorizes_and_completes(repo: TransactionRepository, service: MagicMock) -> None:
    tx = store(repo)

    CategorizationJobQueue(service, repo).dispatch(tx.id)

    updated = repo.get(tx.id)
    assert updated.category_id == 9
    assert updated.categorization_status == "completed"


def test_job_skips_categorized_unless_forced(repo: TransactionRepository, service: MagicMock) -> None:
    tx = store(repo, category_id=3, categorization_status="completed")
    jobs = CategorizationJobQueue(service, repo)

    jobs.dispatch(tx.id)
    service.categorize_transaction.assert_not_called()
    assert repo.get(tx.id).category_id == 3

    jobs.dispatch(tx.id, force_recategorize=True)
    assert repo.get(tx.id).category_id == 9


def test_job_marks_completed_when_nothing_resolves(repo: TransactionRepository, service: MagicMock) -> None:
    service.categorize_transaction.return_value = None
    tx = store(repo)

    CategorizationJobQueue(service, repo).run(tx.id)

    assert repo.get(tx.id).categorization_status == "completed"
    assert repo.get(tx.id).category_id is None


def test_job_errors_are_logged_not_raised(repo: TransactionRepository, service: MagicMock) -> None:
    service.categorize_transaction.side_effect = RuntimeError("boom")
    tx = store(repo)

    CategorizationJobQueue(service, repo).run(tx.id)

    assert repo.get(tx.id).categorization_status == "pending"


def test_job_for_missing_transaction(repo: TransactionRepository, service: MagicMock) -> None:
    CategorizationJobQueue(service, repo).run(404)
    service.categorize_transaction.assert_not_called()


def test_dispatch_uses_executor(repo: TransactionRepository, service: MagicMock) -> None:
    tx = store(repo)
    jobs = CategorizationJobQueue(service, repo, executor=ThreadPoolExecutor(max_workers=1))

    future = jobs.dispatch(tx.id)
    future.result(timeout=5)
    jobs.shutdown()

    assert repo.get(tx.id).categorization_status == "completed"


def test_entry_service_dispatches_job(repo: TransactionRepository, service: MagicMock) -> None:
    entries = TransactionEntryService(repo, CategoryResolver(CategoryRepository()), CategorizationJobQueue(service, repo))
    candidate = ParsedTransactionCandidate(description="Makan siang", amount=25000, currency_id=1, date=date(2025, 1, 2))

    result = entries.create(candidate, "outcome", account_id=4, user_id=2)

    assert result.success is True
    assert result.type == "outcome"
    stored = repo.get(result.transaction.id)
    assert stored.account_id == 4
    assert stored.transaction_date == date(2025, 1, 2)
    assert stored.category_id == 9
    service.categorize_transaction.assert_called_once()


def test_entry_service_shortcut_completes_immediately(repo: TransactionRepository, service: MagicMock) -> None:
    categories = CategoryRepository()
    entries = TransactionEntryService(repo, CategoryResolver(categories), CategorizationJobQueue(service, repo))
    candidate = ParsedTransactionCandidate(description="Zakat fitrah", amount=50000, currency_id=1, date=date(2025, 1, 2))

    result = entries.create(candidate, "outcome", account_id=4, user_id=2)

    assert result.transaction.categorization_status == "completed"
    assert result.transaction.category_id == categories.find("Zakat", 2).id
    service.categorize_transaction.assert_not_called()


def test_entry_service_uses_preassigned_category(repo: TransactionRepository, service: MagicMock) -> None:
    categories = CategoryRepository()
    entries = TransactionEntryService(repo, CategoryResolver(categories), CategorizationJobQueue(service, repo))
    candidate = ParsedTransactionCandidate(
        description="Setor bulanan", amount=50000, currency_id=1, date=date(2025, 1, 2), category_name="Zakat"
    )

    result = entries.create(candidate, "outcome", account_id=4, user_id=2)

    assert result.transaction.categorization_status == "completed"
    assert result.transaction.category_id == categories.find("Zakat", 2).id
    service.categorize_transaction.assert_not_called()


def test_entry_service_reports_failures(service: MagicMock) -> None:
    repo = MagicMock()
    repo.create.side_effect = OSError("disk full")
    entries = TransactionEntryService(repo, CategoryResolver(CategoryRepository()), CategorizationJobQueue(service, repo))
    candidate = ParsedTransactionCandidate(description="Makan", amount=1000, currency_id=1, date=date(2025, 1, 2))

    result = entries.create(candidate, "outcome", account_id=1)

    assert result.success is False
    assert result.error == "disk full"
    assert result.data == candidate


def test_recategorize_forces_job(repo: TransactionRepository, service: MagicMock) -> None:
    entries = TransactionEntryService(repo, CategoryResolver(CategoryRepository()), CategorizationJobQueue(service, repo))
    tx = store(repo, category_id=3, categorization_status="completed")

    assert entries.recategorize(tx.id).category_id == 9
    assert entries.recategorize(404) is None
