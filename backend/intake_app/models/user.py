from sqlalchemy import Column, Integer, Text

from intake_app.models.submission import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(Text, unique=True, nullable=False)
    password = Column(Text, nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
