from agrimarket.models.user import User
from agrimarket.models.listing import Listing
from agrimarket.models.record import SaleRecord, PurchaseRecord
from agrimarket.models.ledger import LedgerEntry, LedgerItem
from agrimarket.models.cart import CartItem
from agrimarket.db.session import engine, Base

def init_db(bind=None):
    # Create all tables
    Base.metadata.create_all(bind=bind or engine)
