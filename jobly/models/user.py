"""
User model for authentication and authorization.

Usernames are the identity carried in access tokens; is_admin drives the
admin-only routes.
"""

from sqlalchemy import Boolean, Column, String, Text, false
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)

    # bcrypt hash, never returned
    password = Column(Text, nullable=False)

    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, server_default=false(), nullable=False)

    # Relationships
    applications = relationship("Application", back_populates="user", passive_deletes=True)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
