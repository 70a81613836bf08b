from sqlalchemy import Column, String, Text
from todolists.database import Base

class User(Base):
    __tablename__ = "users"
    username = Column(String(255), primary_key=True)
    # bcrypt hash, never the plaintext
    password = Column(Text, nullable=False)
