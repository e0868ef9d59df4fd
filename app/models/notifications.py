from app.extensions import db
from app.models.columns import JSONDocument, check_in
from app.models.enums import NotificationType
from app.utils.dates import utcnow

class Notification(db.Model):
    __tablename__ = "notifications"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    type = db.Column(db.String(30), check_in("type", NotificationType), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    extra_data = db.Column(JSONDocument, default=dict)

    is_read = db.Column(db.Boolean, default=False, index=True)
    read_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship("User", back_populates="notifications")

    def mark_as_read(self):
        self.is_read = True
        self.read_at = utcnow()

    __table_args__ = (
        db.Index("idx_notifications_user_created", "user_id", "created_at"),
    )
