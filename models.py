# models.py
from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash

db = SQLAlchemy()

SCORES = ("correct", "incorrect")


# ----- Accounts -----

class Teacher(UserMixin, db.Model):
    __tablename__ = "teachers"
    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)  # stored lower-cased
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    students = db.relationship(
        "Student", backref="teacher", cascade="all, delete-orphan", order_by="Student.id"
    )

    def set_password(self, raw: str):
        self.password_hash = generate_password_hash(raw)

    def check_password(self, raw: str) -> bool:
        return check_password_hash(self.password_hash, raw)

    @staticmethod
    def normalize_email(value: str) -> str:
        return (value or "").strip().lower()


# ----- Roster -----

class Student(db.Model):
    __tablename__ = "students"
    id = db.Column(db.Integer, primary_key=True)
    teacher_id = db.Column(db.Integer, db.ForeignKey("teachers.id"), nullable=False, index=True)
    first_name = db.Column(db.String(120), nullable=False)
    last_name = db.Column(db.String(120), nullable=False)
    grade_level = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    goals = db.relationship(
        "Goal", backref="student", cascade="all, delete-orphan", order_by="Goal.id"
    )
    general_assessments = db.relationship(
        "GeneralAssessment", backref="student", cascade="all, delete-orphan",
        order_by="GeneralAssessment.id",
    )
    fluency_assessments = db.relationship(
        "FluencyAssessment", backref="student", cascade="all, delete-orphan",
        order_by="FluencyAssessment.id",
    )

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"


class Goal(db.Model):
    __tablename__ = "goals"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False, index=True)
    area = db.Column(db.String(40), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)
    goal_grade_level = db.Column(db.String(20), nullable=False)
    mastery_criteria = db.Column(db.Text, nullable=False)
    active = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    items = db.relationship("AssessmentItem", backref="goal", cascade="all, delete")


# ----- Assessments -----

class GeneralAssessment(db.Model):
    __tablename__ = "general_assessments"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    items = db.relationship(
        "AssessmentItem", backref="assessment", cascade="all, delete-orphan",
        order_by="AssessmentItem.position",
    )


class AssessmentItem(db.Model):
    __tablename__ = "general_assessment_items"
    id = db.Column(db.Integer, primary_key=True)
    assessment_id = db.Column(db.Integer, db.ForeignKey("general_assessments.id"), nullable=False, index=True)
    goal_id = db.Column(db.Integer, db.ForeignKey("goals.id"), nullable=False, index=True)
    position = db.Column(db.Integer, nullable=False, default=0)
    prompt = db.Column(db.Text, nullable=False, default="")
    correct_answer = db.Column(db.Text, nullable=False, default="")
    score = db.Column(db.String(10), nullable=False, default="incorrect")  # "correct" | "incorrect"


class FluencyAssessment(db.Model):
    __tablename__ = "fluency_assessments"
    id = db.Column(db.Integer, primary_key=True)
    student_id = db.Column(db.Integer, db.ForeignKey("students.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    total_words_attempted = db.Column(db.Integer, nullable=False)
    errors = db.Column(db.Integer, nullable=False, default=0)
    wcpm = db.Column(db.Integer, nullable=False)  # words correct = attempted - errors
    accuracy_percent = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint("total_words_attempted > 0", name="ck_fluency_attempted_positive"),
        db.CheckConstraint("errors >= 0 AND errors <= total_words_attempted", name="ck_fluency_errors_range"),
    )

    @classmethod
    def from_counts(cls, student_id, on_date, attempted: int, errors: int):
        correct = attempted - errors
        return cls(
            student_id=student_id,
            date=on_date,
            total_words_attempted=attempted,
            errors=errors,
            wcpm=correct,
            accuracy_percent=(correct / attempted) * 100.0,
        )
