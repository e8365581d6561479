"""SheetMap — validadores de célula (valor imutável + fábrica)."""

from .validator import CellValidator  # noqa: F401
from .factory import (  # noqa: F401
    create_greater_than,
    create_less_than,
    create_should_be_one_of,
)
