from fintrack_ai.models import Transaction

from .base import JsonRepository


class TransactionRepository(JsonRepository[Transaction]):
    model = Transaction

    def create(self, transaction: Transaction) -> Transaction:
        return self.add(transaction)

    def save_transaction(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            return self.add(transaction)
        return self.put(transaction)
