# Models package init
from dailydiet.models.meal import Meal
from dailydiet.models.user import User

__all__ = ["Meal", "User"]
