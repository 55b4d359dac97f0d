import abc


class UserRepository(abc.ABC):
    """Credential store. Usernames are unique and compared case-sensitively."""

    @abc.abstractmethod
    def get(self, user_id):
        """Return the user with ``user_id`` or None."""

    @abc.abstractmethod
    def find_by_username(self, username):
        """Return the user with exactly this username or None."""

    @abc.abstractmethod
    def insert_if_absent(self, user):
        """Store ``user`` unless its username is taken. Returns True when stored.

        The existence check and the insert happen as one atomic step.
        """

    @abc.abstractmethod
    def update(self, user):
        """Persist changes made to an already stored user."""

    @abc.abstractmethod
    def list(self):
        """All users in insertion order."""

    @abc.abstractmethod
    def count(self):
        pass


def matches_search(product, search):
    """Case-insensitive substring match on title or description, using Python's Unicode folding."""
    needle = search.lower()
    return needle in product.title.lower() or needle in (product.description or '').lower()


class ProductRepository(abc.ABC):
    """Catalog store."""

    @abc.abstractmethod
    def get(self, product_id):
        """Return the product with ``product_id`` or None."""

    @abc.abstractmethod
    def find(self, category=None, search=None):
        """Products in insertion order filtered by exact category and by a
        case-insensitive substring of title or description."""

    @abc.abstractmethod
    def insert(self, product):
        pass

    @abc.abstractmethod
    def update(self, product):
        pass

    @abc.abstractmethod
    def list(self):
        """All products in insertion order."""

    @abc.abstractmethod
    def count(self):
        pass
