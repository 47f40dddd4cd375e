from dataclasses import dataclass


@dataclass
class Category:
    id: int
    name: str
    type: str           # 'Income' | 'Expense'
    icon: str = ""

    @property
    def label(self) -> str:
        return f"{self.icon} {self.name}".strip()
