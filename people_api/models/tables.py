# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
ORM table declarations — the only schema-to-record mapping in the service.
"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)

    def __repr__(self):
        return f"<Person {self.id} {self.email}>"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="User")

    def __repr__(self):
        return f"<User {self.username}>"
