from enum import Enum


class Category(str, Enum):
    FOOD = "Food"
    TRANSPORTATION = "Transportation"
    SHOPPING = "Shopping"
    ENTERTAINMENT = "Entertainment"
    BILLS = "Bills"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    SALARY = "Salary"
    FREELANCE = "Freelance"
    INVESTMENT = "Investment"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


# 'Other' is offered for both types
INCOME_CATEGORIES = [
    Category.SALARY,
    Category.FREELANCE,
    Category.INVESTMENT,
    Category.OTHER,
]

EXPENSE_CATEGORIES = [
    Category.FOOD,
    Category.TRANSPORTATION,
    Category.SHOPPING,
    Category.ENTERTAINMENT,
    Category.BILLS,
    Category.HEALTHCARE,
    Category.EDUCATION,
    Category.OTHER,
]
