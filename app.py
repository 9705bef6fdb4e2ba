# app.py
from flask import Flask, render_template, redirect, url_for, request, flash
from flask_migrate import Migrate
from flask_login import (
    LoginManager, login_user, login_required, current_user, logout_user
)
from flask_wtf.csrf import CSRFProtect
from sqlalchemy.exc import IntegrityError
from config import Config
from models import (
    db, SCORES, Teacher, Student, Goal, GeneralAssessment, AssessmentItem, FluencyAssessment
)
from forms import (
    RegisterForm, LoginForm, StudentForm, GoalForm, GeneralSaveForm, FluencySaveForm
)
import reports
from datetime import date
from itertools import zip_longest


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # ---- DB, CSRF & Login setup
    db.init_app(app)
    Migrate(app, db)
    CSRFProtect(app)
    login_manager = LoginManager(app)
    login_manager.login_view = "login"

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Teacher, int(user_id))

    with app.app_context():
        db.create_all()

    # ---- Helpers
    THRESHOLD = app.config["MASTERY_THRESHOLD"]
    DESCRIPTION_MAX = app.config["SHORT_DESCRIPTION_MAX"]
    MAX_DB_INT = 2 ** 63 - 1

    def parse_int(value):
        """int(value), or None when it is not a number or does not fit a database integer."""
        try:
            number = int(value)
        except (TypeError, ValueError):
            return None
        if not -MAX_DB_INT <= number <= MAX_DB_INT:
            return None
        return number

    def first_error(form):
        for errors in form.errors.values():
            if errors:
                return errors[0]
        return None

    def teacher_students():
        return (Student.query
                .filter_by(teacher_id=current_user.id)
                .order_by(Student.id.asc())
                .all())

    def owned_student(student_id):
        """The current teacher's student, or None (missing and foreign ids look the same)."""
        sid = parse_int(student_id)
        if not sid:
            return None
        student = db.session.get(Student, sid)
        if student is None:
            return None
        if student.teacher_id != current_user.id:
            app.logger.warning("Teacher %s denied access to student %s", current_user.id, sid)
            return None
        return student

    def owned_goal(goal_id):
        gid = parse_int(goal_id)
        if not gid:
            return None
        goal = db.session.get(Goal, gid)
        if goal is None:
            return None
        if goal.student.teacher_id != current_user.id:
            app.logger.warning("Teacher %s denied access to goal %s", current_user.id, gid)
            return None
        return goal

    def active_goals_for(student):
        if student is None:
            return []
        return [g for g in student.goals if g.active]

    def render_assessments(tab, student, generated_items=None, fluency_data=None):
        return render_template(
            "assessments.html",
            tab=tab,
            students=teacher_students(),
            selected_student=student,
            selected_student_id=student.id if student else None,
            student_goals=active_goals_for(student),
            generated_items=generated_items or [],
            fluency_data=fluency_data,
            today=date.today().isoformat(),
            active="assessments",
        )

    @app.context_processor
    def inject_constants():
        return {
            "goal_areas": app.config.get("GOAL_AREAS", []),
            "score_choices": SCORES,
        }

    # ---- Home

    @app.route("/")
    def index():
        if current_user.is_authenticated:
            return redirect(url_for("students"))
        return redirect(url_for("login"))

    # ---- Auth

    @app.route("/register", methods=["GET", "POST"])
    def register():
        if current_user.is_authenticated:
            return redirect(url_for("students"))
        form = RegisterForm()
        if form.validate_on_submit():
            teacher = Teacher(email=Teacher.normalize_email(form.email.data))
            teacher.set_password(form.password.data)
            db.session.add(teacher)
            try:
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                return render_template("register.html", form=form, hide_header=True,
                                       error="An account with this email already exists.")
            app.logger.info("Registered teacher %s", teacher.id)
            login_user(teacher)
            return redirect(url_for("students"))
        error = first_error(form) if request.method == "POST" else None
        return render_template("register.html", form=form, error=error, hide_header=True)

    @app.route("/login", methods=["GET", "POST"])
    def login():
        if current_user.is_authenticated:
            return redirect(url_for("students"))
        form = LoginForm()
        error = None
        if request.method == "POST":
            if form.validate_on_submit():
                teacher = Teacher.query.filter_by(email=Teacher.normalize_email(form.email.data)).first()
                if teacher and teacher.check_password(form.password.data):
                    login_user(teacher)
                    app.logger.info("Teacher %s logged in", teacher.id)
                    return redirect(url_for("students"))
            app.logger.warning("Failed login for %r", (form.email.data or "").strip())
            error = "Incorrect email or password."
        return render_template("login.html", form=form, error=error, hide_header=True)

    @app.route("/logout", methods=["POST"])
    @login_required
    def logout():
        app.logger.info("Teacher %s logged out", current_user.id)
        logout_user()
        return redirect(url_for("login"))

    # ---- Students

    @app.route("/students")
    @login_required
    def students():
        rows = reports.roster_rows(teacher_students())
        return render_template("students.html", rows=rows, form=StudentForm(), active="students")

    @app.route("/students/add", methods=["POST"])
    @login_required
    def student_add():
        form = StudentForm()
        if not form.validate_on_submit():
            return redirect(url_for("students"))
        s = Student(
            teacher_id=current_user.id,
            first_name=form.first_name.data.strip(),
            last_name=form.last_name.data.strip(),
            grade_level=form.grade_level.data.strip(),
        )
        db.session.add(s)
        db.session.commit()
        app.logger.info("Teacher %s added student %s", current_user.id, s.id)
        flash("Student added.", "success")
        return redirect(url_for("students"))

    @app.route("/students/<int:student_id>/delete", methods=["POST"])
    @login_required
    def student_delete(student_id):
        student = owned_student(student_id)
        if student is not None:
            # goals, assessments and their items go with the student
            db.session.delete(student)
            db.session.commit()
            app.logger.info("Teacher %s deleted student %s", current_user.id, student_id)
            flash("Student deleted.", "success")
        return redirect(url_for("students"))

    @app.route("/students/<int:student_id>")
    @login_required
    def student_detail(student_id):
        student = owned_student(student_id)
        if student is None:
            return redirect(url_for("students"))
        return render_template(
            "student_detail.html",
            student=student,
            goals=student.goals,
            last_assessment_date=reports.last_activity_date(
                student.general_assessments, student.fluency_assessments
            ),
            active="students",
        )

    # ---- Goals

    def goal_form_for(students_list):
        form = GoalForm()
        form.student_id.choices = [(s.id, s.full_name) for s in students_list]
        form.area.choices = [(a, a) for a in app.config.get("GOAL_AREAS", [])]
        return form

    @app.route("/goals")
    @login_required
    def goals():
        students_list = teacher_students()
        selected_student_id = parse_int(request.args.get("student_id"))
        selected_area = (request.args.get("area") or "all").strip() or "all"

        q = (Goal.query
             .join(Student, Goal.student_id == Student.id)
             .filter(Student.teacher_id == current_user.id))
        if selected_student_id:
            q = q.filter(Goal.student_id == selected_student_id)
        if selected_area != "all":
            q = q.filter(Goal.area == selected_area)
        goal_rows = q.order_by(Goal.id.asc()).all()

        form = goal_form_for(students_list)
        if selected_student_id:
            form.student_id.data = selected_student_id

        return render_template(
            "goals.html",
            students=students_list,
            goals=goal_rows,
            form=form,
            selected_student_id=selected_student_id,
            selected_area=selected_area,
            active="goals",
        )

    @app.route("/goals/add", methods=["POST"])
    @login_required
    def goal_add():
        form = goal_form_for(teacher_students())
        if not form.validate_on_submit():
            app.logger.info("Discarded goal submission: %s", form.errors)
            return redirect(url_for("goals"))
        sid = form.student_id.data
        g = Goal(
            student_id=sid,
            area=form.area.data,
            description=form.description.data.strip(),
            goal_grade_level=form.goal_grade_level.data.strip(),
            mastery_criteria=form.mastery_criteria.data.strip(),
            active=True,
        )
        db.session.add(g)
        db.session.commit()
        app.logger.info("Teacher %s added goal %s for student %s", current_user.id, g.id, sid)
        flash("Goal added.", "success")
        return redirect(url_for("goals", student_id=sid))

    @app.route("/goals/<int:goal_id>/delete", methods=["POST"])
    @login_required
    def goal_delete(goal_id):
        goal = owned_goal(goal_id)
        if goal is not None:
            db.session.delete(goal)
            db.session.commit()
            app.logger.info("Teacher %s deleted goal %s", current_user.id, goal_id)
            flash("Goal deleted.", "success")
        return redirect(url_for("goals"))

    @app.route("/goals/<int:goal_id>/toggle", methods=["POST"])
    @login_required
    def goal_toggle(goal_id):
        goal = owned_goal(goal_id)
        if goal is None:
            return redirect(url_for("goals"))
        goal.active = not goal.active
        db.session.commit()
        flash("Goal activated." if goal.active else "Goal deactivated.", "success")
        return redirect(url_for("goals", student_id=goal.student_id))

    # ---- Assessments

    @app.route("/assessments")
    @login_required
    def assessments():
        tab = request.args.get("tab", "general")
        if tab not in ("general", "fluency"):
            tab = "general"
        student = owned_student(request.args.get("student_id"))
        return render_assessments(tab, student)

    @app.route("/assessments/general/generate", methods=["POST"])
    @login_required
    def general_generate():
        student = owned_student(request.form.get("student_id"))
        if student is None:
            return redirect(url_for("assessments", tab="general"))
        wanted = request.form.getlist("goal_ids", type=int)
        by_id = {g.id: g for g in student.goals}
        selected = [by_id[gid] for gid in wanted if gid in by_id]
        return render_assessments("general", student, generated_items=reports.draft_general_items(selected))

    @app.route("/assessments/general/save", methods=["POST"])
    @login_required
    def general_save():
        student = owned_student(request.form.get("student_id"))
        if student is None:
            return redirect(url_for("assessments", tab="general"))
        back = url_for("assessments", tab="general", student_id=student.id)

        form = GeneralSaveForm()
        if not form.validate_on_submit():
            app.logger.info("Discarded general assessment for student %s: %s", student.id, form.errors)
            return redirect(back)

        student_goal_ids = {g.id for g in student.goals}
        rows = zip_longest(
            request.form.getlist("goal_id"),
            request.form.getlist("prompt"),
            request.form.getlist("correct_answer"),
            request.form.getlist("score"),
            fillvalue="",
        )
        items = []
        for goal_id, prompt, answer, score in rows:
            gid = parse_int(goal_id)
            if gid not in student_goal_ids:
                continue
            items.append(AssessmentItem(
                goal_id=gid,
                position=len(items),
                prompt=prompt or "",
                correct_answer=answer or "",
                score=score if score in SCORES else "incorrect",
            ))

        if not items:
            app.logger.info("Discarded general assessment for student %s: no scorable items", student.id)
            return redirect(back)

        a = GeneralAssessment(student_id=student.id, date=form.date.data or date.today(), items=items)
        db.session.add(a)
        db.session.commit()
        app.logger.info("Saved general assessment %s (%d items) for student %s", a.id, len(items), student.id)
        flash("Assessment saved.", "success")
        return redirect(back)

    @app.route("/assessments/fluency/generate", methods=["POST"])
    @login_required
    def fluency_generate():
        student = owned_student(request.form.get("student_id"))
        if student is None:
            return redirect(url_for("assessments", tab="fluency"))
        topic = (request.form.get("topic") or "").strip()
        return render_assessments("fluency", student, fluency_data=reports.draft_fluency(student.id, topic))

    @app.route("/assessments/fluency/save", methods=["POST"])
    @login_required
    def fluency_save():
        student = owned_student(request.form.get("student_id"))
        if student is None:
            return redirect(url_for("assessments", tab="fluency"))
        back = url_for("assessments", tab="fluency", student_id=student.id)

        form = FluencySaveForm()
        if not form.validate_on_submit():
            app.logger.info("Discarded fluency assessment for student %s: %s", student.id, form.errors)
            return redirect(back)

        f = FluencyAssessment.from_counts(
            student.id,
            form.date.data or date.today(),
            form.total_words_attempted.data,
            form.word_errors.data or 0,
        )
        db.session.add(f)
        db.session.commit()
        app.logger.info("Saved fluency assessment %s for student %s", f.id, student.id)
        flash("Fluency assessment saved.", "success")
        return redirect(back)

    # ---- Reports

    @app.route("/reports")
    @login_required
    def reports_home():
        if request.args.get("tab") == "class":
            return redirect(url_for("reports_class"))
        return redirect(url_for("reports_student"))

    @app.route("/reports/student")
    @login_required
    def reports_student():
        students_list = teacher_students()
        student = owned_student(request.args.get("student_id"))
        goals_summary = []
        fluency_summary = []
        if student is not None:
            goals_summary = reports.goal_mastery_summary(student.goals, student.general_assessments, THRESHOLD)
            fluency_summary = reports.fluency_summary(student.fluency_assessments)
        return render_template(
            "reports_student.html",
            students=students_list,
            selected_student=student,
            goals_summary=goals_summary,
            fluency_summary=fluency_summary,
            active="reports",
        )

    @app.route("/reports/class")
    @login_required
    def reports_class():
        area = (request.args.get("area") or "all").strip() or "all"
        grade = (request.args.get("grade") or "all").strip() or "all"
        students_list = teacher_students()
        rows = reports.class_rollup(students_list, THRESHOLD, DESCRIPTION_MAX)
        rows = reports.filter_class_rows(rows, area=area, grade=grade)
        return render_template(
            "reports_class.html",
            rows=rows,
            selected_area=area,
            selected_grade=grade,
            grades=reports.distinct_grades(students_list),
            areas=reports.distinct_areas(students_list),
            active="reports",
        )

    # ---- Critical: return the Flask app object
    return app


if __name__ == "__main__":
    app = create_app()
    app.logger.info("Progress-Monitoring app listening on port %s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"])
