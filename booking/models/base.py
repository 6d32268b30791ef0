# booking/models/base.py
from sqlalchemy.orm import declarative_base

# Shared declarative base for every model
Base = declarative_base()
