from sqlalchemy import Column, DateTime, ForeignKey, Integer, LargeBinary, String, Text
from sqlalchemy.orm import relationship
from tasktracker.database import Base
from tasktracker.models._timestamps import utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    age = Column(Integer, nullable=False, default=0)
    avatar = Column(LargeBinary, nullable=True)
    avatar_content_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # row id order == login order
    tokens = relationship(
        "UserToken",
        back_populates="user",
        order_by="UserToken.id",
        cascade="all, delete-orphan",
    )

    @property
    def token_values(self):
        return [t.token for t in self.tokens]

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"


class UserToken(Base):
    __tablename__ = "user_tokens"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    token = Column(Text, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    user = relationship("User", back_populates="tokens")
