# seed.py
from datetime import date, timedelta

from app import create_app
from models import (
    db, Teacher, Student, Goal, GeneralAssessment, AssessmentItem, FluencyAssessment
)


def seed():
    app = create_app()
    with app.app_context():
        db.drop_all()
        db.create_all()

        teacher = Teacher(email="demo@school.test")
        teacher.set_password("demo 123!")
        db.session.add(teacher)
        db.session.flush()  # so teacher.id exists

        students = [
            Student(teacher_id=teacher.id, first_name="Ava", last_name="Lopez", grade_level="3"),
            Student(teacher_id=teacher.id, first_name="Noah", last_name="Kim", grade_level="4"),
        ]
        db.session.add_all(students)
        db.session.flush()

        reading = Goal(student_id=students[0].id, area="Reading",
                       description="Decode CVC words with short vowels",
                       goal_grade_level="2", mastery_criteria="80% over 3 sessions")
        math = Goal(student_id=students[0].id, area="Math",
                    description="Add two-digit numbers with regrouping",
                    goal_grade_level="3", mastery_criteria="4 of 5 trials")
        writing = Goal(student_id=students[1].id, area="Writing",
                       description="Write a paragraph with a topic sentence and three details",
                       goal_grade_level="4", mastery_criteria="3 consecutive samples")
        db.session.add_all([reading, math, writing])
        db.session.flush()

        today = date.today()
        scores = ["correct", "correct", "incorrect", "correct", "correct"]
        db.session.add(GeneralAssessment(
            student_id=students[0].id,
            date=today - timedelta(days=7),
            items=[
                AssessmentItem(goal_id=reading.id if i % 2 == 0 else math.id, position=i,
                               prompt=f"Item {i + 1}", correct_answer="-", score=s)
                for i, s in enumerate(scores)
            ],
        ))
        db.session.add_all([
            FluencyAssessment.from_counts(students[0].id, today - timedelta(days=14), 80, 12),
            FluencyAssessment.from_counts(students[0].id, today - timedelta(days=3), 92, 7),
        ])
        db.session.commit()

        print("Seeded: 1 teacher (demo@school.test / 'demo 123!'), 2 students, 3 goals, sample assessments.")


if __name__ == "__main__":
    seed()
