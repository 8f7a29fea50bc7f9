from src.pt_common.errors import InvalidQuantityError


def check_quantity(quantity: int) -> None:
    # bool is an int subclass; True must not buy one share
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidQuantityError(quantity)
