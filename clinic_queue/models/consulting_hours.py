from clinic_queue.extensions import db

DAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')


class ConsultingHours(db.Model):
    """
    Weekly recurring consulting window for a doctor-clinic pairing.

    day_of_week follows date.weekday(): 0 = Monday ... 6 = Sunday.
    max_patients caps the appointments admitted into this window on one day.
    """
    __tablename__ = 'consulting_hours'
    __table_args__ = (
        db.CheckConstraint('start_time < end_time', name='ck_consulting_hours_window'),
        db.CheckConstraint('max_patients > 0', name='ck_consulting_hours_max_patients'),
        db.CheckConstraint('day_of_week >= 0 AND day_of_week <= 6', name='ck_consulting_hours_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    doctor_clinic_id = db.Column(db.Integer, db.ForeignKey('doctor_clinics.id'), nullable=False, index=True)
    day_of_week = db.Column(db.Integer, nullable=False, index=True)
    start_time = db.Column(db.Time, nullable=False)
    end_time = db.Column(db.Time, nullable=False)
    max_patients = db.Column(db.Integer, nullable=False)

    def contains(self, time_of_day):
        """Inclusive on both bounds."""
        return self.start_time <= time_of_day <= self.end_time

    def bounds(self):
        return {
            'start_time': self.start_time.strftime('%H:%M'),
            'end_time': self.end_time.strftime('%H:%M'),
        }

    def to_dict(self):
        return {
            'id': self.id,
            'doctor_clinic_id': self.doctor_clinic_id,
            'day_of_week': self.day_of_week,
            'day_name': DAY_NAMES[self.day_of_week],
            'start_time': self.start_time.strftime('%H:%M'),
            'end_time': self.end_time.strftime('%H:%M'),
            'max_patients': self.max_patients,
        }

    def __repr__(self):
        return f"<ConsultingHours {DAY_NAMES[self.day_of_week]} {self.start_time}-{self.end_time} max={self.max_patients}>"
