from meditime.extensions import db
from meditime.models.enums import InteractionType, SeverityLevel

class DrugInteraction(db.Model):
    __tablename__ = "drug_interactions"
    id = db.Column(db.Integer, primary_key=True)
    medicine_a_id = db.Column(db.Integer, db.ForeignKey("medicines.id", ondelete="CASCADE"), nullable=False, index=True)
    medicine_b_id = db.Column(db.Integer, db.ForeignKey("medicines.id", ondelete="CASCADE"), nullable=False, index=True)

    severity_level = db.Column(db.Enum(SeverityLevel), nullable=False)
    interaction_type = db.Column(db.Enum(InteractionType), nullable=False)
    description = db.Column(db.Text, nullable=False)
    recommendation = db.Column(db.Text, nullable=True)

    medicine_a = db.relationship("Medicine", foreign_keys=[medicine_a_id])
    medicine_b = db.relationship("Medicine", foreign_keys=[medicine_b_id])

    __table_args__ = (db.UniqueConstraint("medicine_a_id", "medicine_b_id", name="uq_drug_interaction_pair"),)

    def other_side(self, medicine_id):
        return self.medicine_b if self.medicine_a_id == medicine_id else self.medicine_a
