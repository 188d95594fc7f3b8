"""Storefront bounded context: Catalogue, Accounts, Cart, Orders and Reviews.

A single Protean domain holds every aggregate of the storefront so that cart
mutations, checkout and review submission can read and write across
aggregates inside one Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
