from textual.message import Message


class QuitRequestedMessage(Message):
    """
    broadcasted when the app is about to quit
    """

    bubble = True


class UserLogoutMessage(Message):
    """
    broadcasted when the user confirms logout from the sidebar
    """

    bubble = True


class CartChangedMessage(Message):
    """
    Fired by CartScreen whenever it changes the in-memory cart (remove,
    clear, checkout) so its table re-reads state.cart. Other screens pick
    the cart up again on ScreenResume.
    """

    bubble = True
