"""User model."""

from sqlalchemy import BigInteger, Column, Integer, String, Text

from userauth.database import Base
from userauth.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """Registered user with profile fields and a bcrypt password hash.

    ``image`` holds only the stored filename; the public URL is built at read
    time from ``Settings.file_path``.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    password = Column(String(255), nullable=False)
    phone = Column(BigInteger, nullable=False)
    address = Column(Text, nullable=False)
    image = Column(String(255), nullable=False)
