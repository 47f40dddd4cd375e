from dataclasses import dataclass


@dataclass
class Summary:
    total_income: float = 0.0
    total_expenses: float = 0.0

    @property
    def balance(self) -> float:
        return round(self.total_income - self.total_expenses, 2)
