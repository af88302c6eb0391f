from src.service.restaurant_booking.app.interface.i_user_existence import IUserExistence


class TrustedTokenUserExistence(IUserExistence):
    """
    Accounts live in the identity service; a caller holding a valid token is
    taken to exist. Swap in a lookup-backed implementation to enforce it here.
    """

    async def exists(self, *, user_id: str) -> bool:
        return bool(user_id and user_id.strip())
