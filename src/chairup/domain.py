"""ChairUp domain — catalogue, carts, orders, reviews and promotions.

A single Protean domain owns every aggregate so that an order and the stock it
reserves commit in one unit of work. PROTEAN_ENV selects the overlay from
domain.toml:
  - "test", "development" → in-memory providers
  - "production"          → PostgreSQL, URI from DATABASE_URL
"""

from protean.domain import Domain

from chairup.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

chairup = Domain(name="chairup")
