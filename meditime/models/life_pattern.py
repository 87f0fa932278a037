from meditime.extensions import db
from sqlalchemy.sql import func

class LifePattern(db.Model):
    __tablename__ = "life_patterns"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)

    # wall-clock "HH:MM", no timezone
    wake_up_time = db.Column(db.String(5), nullable=False)
    bed_time = db.Column(db.String(5), nullable=False)
    breakfast_time = db.Column(db.String(5), nullable=True)
    lunch_time = db.Column(db.String(5), nullable=True)
    dinner_time = db.Column(db.String(5), nullable=True)
    work_start_time = db.Column(db.String(5), nullable=True)
    work_end_time = db.Column(db.String(5), nullable=True)

    has_driving = db.Column(db.Boolean, nullable=False, default=False)
    has_focus_work = db.Column(db.Boolean, nullable=False, default=False)
    updated_at = db.Column(db.DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = db.relationship("User", backref=db.backref("life_pattern", uselist=False, cascade="all,delete"))

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "wake_up_time": self.wake_up_time,
            "bed_time": self.bed_time,
            "breakfast_time": self.breakfast_time,
            "lunch_time": self.lunch_time,
            "dinner_time": self.dinner_time,
            "work_start_time": self.work_start_time,
            "work_end_time": self.work_end_time,
            "has_driving": self.has_driving,
            "has_focus_work": self.has_focus_work,
        }
