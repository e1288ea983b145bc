from typing import List, Tuple

from sqlalchemy.orm import Session

from agrimarket.models.record import PurchaseRecord, SaleRecord


class RecordStore:
    """Seller-side sale records and buyer-side purchase records. Insert-only."""

    def __init__(self, db: Session):
        self.db = db

    def record_sale(self, sale: SaleRecord) -> SaleRecord:
        self.db.add(sale)
        self.db.flush()
        return sale

    def record_purchase(self, purchase: PurchaseRecord) -> PurchaseRecord:
        self.db.add(purchase)
        self.db.flush()
        return purchase

    def list_sales_by_farmer(self, farmer_id: int) -> List[SaleRecord]:
        return (
            self.db.query(SaleRecord)
            .filter(SaleRecord.seller_id == farmer_id)
            .order_by(SaleRecord.created_at.desc(), SaleRecord.id.desc())
            .all()
        )

    def list_purchases_by_customer(self, customer_id: int) -> List[PurchaseRecord]:
        return (
            self.db.query(PurchaseRecord)
            .filter(PurchaseRecord.buyer_id == customer_id)
            .order_by(PurchaseRecord.created_at.desc(), PurchaseRecord.id.desc())
            .all()
        )

    def find_by_transaction_id(
        self, transaction_id: str
    ) -> Tuple[List[SaleRecord], List[PurchaseRecord]]:
        sales = self.db.query(SaleRecord).filter(
            SaleRecord.transaction_id == transaction_id
        ).all()
        purchases = self.db.query(PurchaseRecord).filter(
            PurchaseRecord.transaction_id == transaction_id
        ).all()
        return sales, purchases
