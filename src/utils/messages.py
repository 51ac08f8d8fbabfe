from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    broadcasted when a customer or admin signs out
    """

    bubble = True


class UserLoginMessage(Message):
    """
    Fired after a customer signs in or admin access is granted,
    so the sidebar and dashboards can refresh
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired whenever a line is added, edited or removed.
    Post at App level when sent from outside the cart screen.
    """

    bubble = True


class NewOrderMessage(Message):
    """
    Fired when an order is placed.
    Listened to by the order history and the admin dashboard.
    """

    bubble = True

    def __init__(self, order_id: str) -> None:
        super().__init__()
        self.order_id = order_id


class ModeSwitchedMessage(Message):
    """
    fired whenever switch_mode is called
    must be fired from app level
    """

    bubble = True

    def __init__(self, old_mode: str, new_mode: str) -> None:
        super().__init__()
        self.old_mode = old_mode
        self.new_mode = new_mode
