# reports.py
"""
Progress-monitoring aggregations.

Everything here is a pure function over already-loaded records (ORM rows or
anything with the same attributes). Views scope the inputs to the logged-in
teacher before calling in, so nothing here touches the session.
"""
from collections import defaultdict

from config import Config

MASTERY_THRESHOLD = Config.MASTERY_THRESHOLD
SHORT_DESCRIPTION_MAX = Config.SHORT_DESCRIPTION_MAX

STATUS_ON_TRACK = "On Track"
STATUS_NEEDS_SUPPORT = "Needs Support"
STATUS_NO_DATA = "No Recent Data"

TREND_FLAT = "Flat"
TREND_NO_DATA = "No Data"


def mastery_status(pct, threshold=MASTERY_THRESHOLD):
    if pct is None:
        return STATUS_NO_DATA
    return STATUS_ON_TRACK if pct >= threshold else STATUS_NEEDS_SUPPORT


def round_pct(pct):
    """Display rounding only; status decisions use the raw value."""
    return None if pct is None else round(pct, 1)


def latest_percent_correct(goal_id, assessments):
    """Percent of items scored correct for a goal on its most recent assessment date.

    Items from every assessment sharing that latest date are pooled.
    Returns None when the goal has never been scored.
    """
    by_date = defaultdict(list)
    for a in assessments or []:
        for item in a.items or []:
            if item.goal_id == goal_id:
                by_date[a.date].append(item)

    if not by_date:
        return None

    items = by_date[max(by_date)]
    if not items:
        return None
    correct = sum(1 for it in items if it.score == "correct")
    return (correct / len(items)) * 100.0


def goal_mastery_summary(goals, assessments, threshold=MASTERY_THRESHOLD):
    rows = []
    for g in goals or []:
        pct = latest_percent_correct(g.id, assessments)
        rows.append({
            "goal_id": g.id,
            "area": g.area,
            "description": g.description,
            "latest_percent_correct": round_pct(pct),
            "trend": TREND_NO_DATA if pct is None else TREND_FLAT,
            "status": mastery_status(pct, threshold),
        })
    return rows


def fluency_summary(fluencies):
    return [
        {
            "date": f.date,
            "wcpm": f.wcpm,
            "accuracy_percent": round_pct(f.accuracy_percent),
            "trend": TREND_FLAT,
        }
        for f in fluencies or []
    ]


def latest_fluency(fluencies):
    latest = None
    for f in fluencies or []:
        # strict ">" keeps the first record on a tie
        if latest is None or f.date > latest.date:
            latest = f
    return latest


def last_activity_date(general_assessments, fluency_assessments):
    dates = [a.date for a in (general_assessments or [])]
    dates += [f.date for f in (fluency_assessments or [])]
    return max(dates) if dates else None


def short_description(text, limit=SHORT_DESCRIPTION_MAX):
    text = text or ""
    if len(text) > limit:
        return text[:limit - 3] + "..."
    return text


def roster_rows(students):
    return [
        {
            "student": s,
            "goal_count": len(s.goals),
            "last_assessment_date": last_activity_date(s.general_assessments, s.fluency_assessments),
        }
        for s in students or []
    ]


def class_rollup(students, threshold=MASTERY_THRESHOLD, description_limit=SHORT_DESCRIPTION_MAX):
    """One row per (student, goal) with the goal's latest mastery and the student's latest WCPM."""
    rows = []
    for s in students or []:
        latest = latest_fluency(s.fluency_assessments)
        for g in s.goals or []:
            pct = latest_percent_correct(g.id, s.general_assessments)
            rows.append({
                "student_id": s.id,
                "student_name": f"{s.first_name} {s.last_name}",
                "grade_level": s.grade_level,
                "goal_area": g.area,
                "short_goal_description": short_description(g.description, description_limit),
                "latest_percent_correct": round_pct(pct),
                "latest_fluency_wcpm": latest.wcpm if latest else None,
                "status": mastery_status(pct, threshold),
            })
    return rows


def filter_class_rows(rows, area="all", grade="all"):
    if area and area != "all":
        rows = [r for r in rows if r["goal_area"] == area]
    if grade and grade != "all":
        rows = [r for r in rows if r["grade_level"] == grade]
    return rows


def distinct_grades(students):
    seen = []
    for s in students or []:
        if s.grade_level and s.grade_level not in seen:
            seen.append(s.grade_level)
    return seen


def distinct_areas(students):
    seen = []
    for s in students or []:
        for g in s.goals or []:
            if g.area and g.area not in seen:
                seen.append(g.area)
    return seen


# ----- Draft content for new assessments -----

SAMPLE_CORRECT_ANSWER = "Teacher-defined correct answer"
SAMPLE_PASSAGE = (
    "This is a sample reading passage generated for fluency practice. "
    "In a real app, this text would match the student's grade level and chosen topic."
)


def draft_general_items(goals):
    return [
        {
            "goal_id": g.id,
            "goal_area": g.area,
            "goal_description": g.description,
            "prompt": f'Sample item for goal "{g.description}"',
            "correct_answer": SAMPLE_CORRECT_ANSWER,
            "score": "incorrect",
        }
        for g in goals or []
    ]


def draft_fluency(student_id, topic=""):
    return {
        "student_id": student_id,
        "topic": topic or "",
        "passage_text": SAMPLE_PASSAGE,
    }
