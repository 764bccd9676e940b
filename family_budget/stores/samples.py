"""Sample data installed on first run (when a collection was never saved)."""

from datetime import date

from family_budget.models.ledger import FinancialGoal, Transaction, TransactionType


def sample_transactions() -> list[Transaction]:
    return [
        Transaction(id="1", type=TransactionType.INCOME, category="Зарплата",
                    amount=85000, date=date(2025, 10, 1), description="Зарплата за октябрь"),
        Transaction(id="2", type=TransactionType.EXPENSE, category="Продукты",
                    amount=12500, date=date(2025, 10, 5), description="Покупки в супермаркете"),
        Transaction(id="3", type=TransactionType.EXPENSE, category="Транспорт",
                    amount=3200, date=date(2025, 10, 7), description="Проездной"),
        Transaction(id="4", type=TransactionType.EXPENSE, category="Развлечения",
                    amount=5600, date=date(2025, 10, 10), description="Кино и кафе"),
        Transaction(id="5", type=TransactionType.INCOME, category="Фриланс",
                    amount=25000, date=date(2025, 10, 15), description="Проект на фрилансе"),
        Transaction(id="6", type=TransactionType.EXPENSE, category="Дом и ЖКХ",
                    amount=8900, date=date(2025, 10, 20), description="Коммунальные услуги"),
    ]


def sample_goals() -> list[FinancialGoal]:
    return [
        FinancialGoal(id="1", name="Новый ноутбук", target_amount=80000, current_amount=35000),
        FinancialGoal(id="2", name="Отпуск", target_amount=120000, current_amount=48000),
    ]
