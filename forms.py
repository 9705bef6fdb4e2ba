# forms.py
from flask_wtf import FlaskForm
from wtforms import (
    StringField, PasswordField, SubmitField, SelectField,
    IntegerField, TextAreaField, DateField
)
from wtforms.validators import DataRequired, EqualTo, Length, NumberRange, Optional, ValidationError
from sqlalchemy import func
from models import Teacher

MAX_WORDS = 100000  # far above any timed reading passage


class RegisterForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(message="Please fill in all fields."), Length(max=255)])
    password = PasswordField("Password", validators=[DataRequired(message="Please fill in all fields.")])
    confirm_password = PasswordField(
        "Confirm password",
        validators=[DataRequired(message="Please fill in all fields."),
                    EqualTo("password", message="Passwords do not match.")],
    )
    submit = SubmitField("Create account")

    def validate_email(self, field):
        existing = Teacher.query.filter(func.lower(Teacher.email) == Teacher.normalize_email(field.data)).first()
        if existing:
            raise ValidationError("An account with this email already exists.")


class LoginForm(FlaskForm):
    email = StringField("Email", validators=[DataRequired(), Length(max=255)])
    password = PasswordField("Password", validators=[DataRequired()])
    submit = SubmitField("Log in")


# --- Roster ---

class StudentForm(FlaskForm):
    first_name = StringField("First name", validators=[DataRequired(), Length(max=120)])
    last_name = StringField("Last name", validators=[DataRequired(), Length(max=120)])
    grade_level = StringField("Grade level", validators=[DataRequired(), Length(max=20)])
    submit = SubmitField("Add student")


class GoalForm(FlaskForm):
    student_id = SelectField("Student", coerce=int, validators=[DataRequired()])
    area = SelectField("Area", validators=[DataRequired()])
    description = TextAreaField("Goal description", validators=[DataRequired(), Length(max=2000)])
    goal_grade_level = StringField("Goal grade level", validators=[DataRequired(), Length(max=20)])
    mastery_criteria = StringField("Mastery criteria", validators=[DataRequired(), Length(max=500)])
    submit = SubmitField("Add goal")


# --- Assessments ---

class GeneralSaveForm(FlaskForm):
    # Item rows (goal_id / prompt / correct_answer / score) arrive as parallel lists
    # and are read from request.form in the view.
    student_id = IntegerField("Student", validators=[DataRequired()])
    date = DateField("Date", validators=[Optional()])
    submit = SubmitField("Save assessment")


class FluencySaveForm(FlaskForm):
    student_id = IntegerField("Student", validators=[DataRequired()])
    date = DateField("Date", validators=[Optional()])
    total_words_attempted = IntegerField("Total words attempted", validators=[DataRequired(), NumberRange(min=1, max=MAX_WORDS)])
    word_errors = IntegerField("Errors", name="errors", validators=[Optional(), NumberRange(min=0, max=MAX_WORDS)])
    submit = SubmitField("Save fluency")

    def validate_word_errors(self, field):
        attempted = self.total_words_attempted.data
        if field.data is not None and attempted is not None and field.data > attempted:
            raise ValidationError("Errors cannot exceed words attempted.")

