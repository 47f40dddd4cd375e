from dataclasses import dataclass


@dataclass
class Transaction:
    id: int
    date: str               # 'YYYY-MM-DD'
    category: str           # category name, stored by value
    amount: float           # always > 0; direction comes from the category
    notes: str = ""
