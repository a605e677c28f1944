from models import db, BIGINT, utcnow


class Admin(db.Model):
    __tablename__ = "admin"

    id = db.Column(BIGINT, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {"id": self.id, "email": self.email, "name": self.name}

    def __repr__(self):
        return f"<Admin id={self.id} email={self.email}>"
