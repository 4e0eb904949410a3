from __future__ import annotations

import argparse
import json
from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from korelium.core.logging import configure_logging, get_logger
from korelium.core.security import get_password_hash
from korelium.core.slug import slugify
from korelium.db.base import Base
from korelium.db.session import SessionLocal, engine
from korelium.modules.admins.models import LocalAdmin
from korelium.modules.courses.models import Course, CourseLevel

logger = get_logger(__name__)

SAMPLE_COURSES = [
    {
        "title": "Complete Web Development Bootcamp",
        "description": "Learn HTML, CSS, JavaScript, React, Node.js and become a full-stack developer",
        "full_description": (
            "Master web development with this comprehensive bootcamp, from basic HTML "
            "and CSS to React and Node.js."
        ),
        "image": "https://images.unsplash.com/photo-1498050108023-c5249f4df085?w=400&h=200&fit=crop",
        "category": "Web Development",
        "tags": ["JavaScript", "React", "Node.js", "HTML", "CSS"],
        "instructor": "John Smith",
        "duration": "40 hours",
        "students": 15420,
        "rating": 4.8,
        "udemy_link": "https://udemy.com/course/example-1",
        "prerequisites": "Basic computer skills",
        "level": CourseLevel.beginner,
        "what_youll_learn": [
            "Build responsive websites with HTML and CSS",
            "Create interactive web applications with JavaScript",
            "Develop modern frontends with React",
            "Build backend APIs with Node.js",
        ],
    },
    {
        "title": "Advanced JavaScript Mastery",
        "description": "Closures, prototypes, async patterns and the event loop",
        "category": "Web Development",
        "tags": ["JavaScript", "Async"],
        "instructor": "Ada Lane",
        "duration": "18 hours",
        "level": CourseLevel.advanced,
        "what_youll_learn": ["Reason about the event loop", "Write idiomatic async code"],
    },
    {
        "title": "Digital Marketing Masterclass",
        "description": "Complete guide to SEO, social media marketing, and online advertising strategies",
        "image": "https://images.unsplash.com/photo-1460925895917-afdab827c52f?w=400&h=200&fit=crop",
        "category": "Marketing",
        "tags": ["SEO", "Social Media", "Google Ads", "Content Marketing"],
        "instructor": "Sarah Johnson",
        "duration": "25 hours",
        "students": 8930,
        "rating": 4.7,
        "udemy_link": "https://udemy.com/course/example-2",
        "prerequisites": "No prior experience needed",
        "level": CourseLevel.intermediate,
        "what_youll_learn": [
            "Master SEO techniques for better rankings",
            "Create effective social media campaigns",
            "Set up and optimize Google Ads",
        ],
    },
    {
        "title": "Data Science with Python",
        "description": "Pandas, NumPy and scikit-learn from the ground up",
        "category": "Data Science",
        "tags": ["Python", "Pandas", "Machine Learning"],
        "instructor": "Priya Raman",
        "duration": "32 hours",
        "rating": 4.6,
        "level": CourseLevel.all_levels,
        "what_youll_learn": ["Clean and explore data", "Train and evaluate models"],
    },
]


def get_or_create_admin(db: Session, name: str, email: str, password: str, role: str) -> LocalAdmin:
    email = email.lower()
    admin = db.execute(select(LocalAdmin).where(LocalAdmin.email == email)).scalar_one_or_none()
    if admin:
        return admin
    admin = LocalAdmin(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
    )
    db.add(admin)
    return admin


def reset_data(db: Session) -> None:
    for model in [Course, LocalAdmin]:
        db.execute(delete(model))
    db.commit()


def seed_courses(db: Session) -> int:
    created = 0
    # distinct timestamps keep listing order stable
    base_time = datetime.now(timezone.utc) - timedelta(minutes=len(SAMPLE_COURSES))
    for index, sample in enumerate(SAMPLE_COURSES):
        slug = slugify(sample["title"])
        if db.execute(select(Course.id).where(Course.slug == slug)).first():
            continue
        fields = dict(sample)
        fields["tags"] = json.dumps(fields.get("tags", []))
        fields["what_youll_learn"] = json.dumps(fields.get("what_youll_learn", []))
        fields["level"] = fields["level"].value
        fields["last_updated"] = str(base_time.year)
        fields["certificate"] = True
        db.add(
            Course(
                slug=slug,
                created_at=base_time + timedelta(minutes=index),
                updated_at=base_time + timedelta(minutes=index),
                **fields,
            )
        )
        created += 1
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the Korelium database")
    parser.add_argument("--admin-email", required=True)
    parser.add_argument("--admin-password", required=True)
    parser.add_argument("--admin-name", default="Korelium Admin")
    parser.add_argument("--with-sample-courses", action="store_true")
    parser.add_argument("--reset", action="store_true", help="delete existing courses and admins first")
    parser.add_argument("--create-tables", action="store_true", help="create tables without alembic")
    args = parser.parse_args()

    configure_logging()

    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        if args.reset:
            reset_data(db)
        admin = get_or_create_admin(
            db,
            name=args.admin_name,
            email=args.admin_email,
            password=args.admin_password,
            role="super_admin",
        )
        courses = seed_courses(db) if args.with_sample_courses else 0
        db.commit()
        logger.info("seed complete", admin_email=admin.email, courses_created=courses)
    finally:
        db.close()


if __name__ == "__main__":
    main()
