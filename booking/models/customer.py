# booking/models/customer.py
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.sql import func
from booking.models.base import Base


class Customer(Base):
    __tablename__ = "customer"

    cust_id = Column(Integer, primary_key=True, autoincrement=True)
    cust_fname = Column(String(100), nullable=False)
    cust_lname = Column(String(100), nullable=True)
    cust_email = Column(String(255), nullable=False)
    cust_phone = Column(String(20), nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Customer(cust_id={self.cust_id}, email={self.cust_email})>"
