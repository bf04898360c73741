from models.base_model import Base, BaseModel
from sqlalchemy import Boolean, Column, String, false


class User(BaseModel, Base):
    __tablename__ = "users"
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    is_chirpy_red = Column(Boolean, nullable=False, default=False, server_default=false())

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")
