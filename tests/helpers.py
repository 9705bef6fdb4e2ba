from models import Teacher, Student, Goal

EMAIL = "teacher@school.test"
PASSWORD = "s3cret!"


def register(client, email=EMAIL, password=PASSWORD, confirm=None):
    return client.post("/register", data={
        "email": email,
        "password": password,
        "confirm_password": password if confirm is None else confirm,
    })


def login(client, email=EMAIL, password=PASSWORD):
    return client.post("/login", data={"email": email, "password": password})


def add_student(client, first="Ava", last="Lopez", grade="3"):
    return client.post("/students/add", data={
        "first_name": first, "last_name": last, "grade_level": grade,
    })


def add_goal(client, student_id, area="Reading", description="Decode CVC words"):
    return client.post("/goals/add", data={
        "student_id": student_id,
        "area": area,
        "description": description,
        "goal_grade_level": "2",
        "mastery_criteria": "80% over 3 sessions",
    })


def students_of(app, email=EMAIL):
    with app.app_context():
        tid = Teacher.query.filter_by(email=email.lower()).one().id
        return [s.id for s in Student.query.filter_by(teacher_id=tid).order_by(Student.id).all()]


def goals_of(app, student_id):
    with app.app_context():
        return [g.id for g in Goal.query.filter_by(student_id=student_id).order_by(Goal.id).all()]
