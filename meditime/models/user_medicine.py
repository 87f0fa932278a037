import json
from datetime import datetime
from meditime.extensions import db
from meditime.models.enums import MedicineStatus

DOSAGE_LIMIT = 60


class UserMedicine(db.Model):
    __tablename__ = "user_medicines"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    medicine_id = db.Column(db.Integer, db.ForeignKey("medicines.id", ondelete="CASCADE"), nullable=False, index=True)

    dosage = db.Column(db.String(DOSAGE_LIMIT), nullable=False, default="1 tablet")
    frequency = db.Column(db.Integer, nullable=False, default=1)   # doses per day
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    notes = db.Column(db.Text, nullable=True)
    recommended_times = db.Column(db.Text, nullable=True)          # JSON list of "HH:MM"

    status = db.Column(db.Enum(MedicineStatus), nullable=False, default=MedicineStatus.ACTIVE)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref=db.backref("user_medicines", cascade="all,delete-orphan"))
    medicine = db.relationship("Medicine")

    __table_args__ = (db.Index("ix_user_medicine_status", "user_id", "status"),)

    @property
    def is_active(self):
        return self.status == MedicineStatus.ACTIVE

    @property
    def times(self):
        return json.loads(self.recommended_times) if self.recommended_times else []

    @times.setter
    def times(self, values):
        self.recommended_times = json.dumps(list(values))

    def remove(self):
        self.status = MedicineStatus.REMOVED

    def to_dict(self, include_medicine=True):
        data = {
            "id": self.id,
            "medicine_id": self.medicine_id,
            "dosage": self.dosage,
            "frequency": self.frequency,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "notes": self.notes,
            "recommended_times": self.times,
            "status": self.status.value,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_medicine and self.medicine is not None:
            data["medicine"] = self.medicine.to_dict()
        return data
