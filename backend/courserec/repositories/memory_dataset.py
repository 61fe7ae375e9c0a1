# repositories/memory_dataset.py
"""
In-memory snapshot of the relational store for development/testing
"""
import os
import threading
import logging
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Iterable

import pandas as pd

from ..models.course import Course, Review, ReviewStatus, Interaction, Favorite
from ..models.user import User

logger = logging.getLogger(__name__)


def _read_table(directory: str, name: str, text_columns: List[str]) -> pd.DataFrame:
    path = os.path.join(directory, f"{name}.csv")
    if not os.path.exists(path):
        logger.info(f"No {name}.csv in {directory}, treating table as empty")
        return pd.DataFrame(columns=text_columns)
    return pd.read_csv(path, dtype={column: str for column in text_columns})


def _optional(value):
    return None if pd.isna(value) else value


def _optional_int(value) -> Optional[int]:
    return None if pd.isna(value) else int(value)


def _group_column(df: pd.DataFrame, key: str, column: str) -> Dict[str, List[str]]:
    if df.empty:
        return {}
    return df.groupby(key, sort=False)[column].apply(list).to_dict()


class MemoryDataset:
    """Users, courses, reviews, interactions and favorites held in memory"""

    def __init__(
        self,
        users: Optional[Iterable[User]] = None,
        courses: Optional[Iterable[Course]] = None,
        reviews: Optional[Iterable[Review]] = None,
        interactions: Optional[Iterable[Interaction]] = None,
        favorites: Optional[Iterable[Favorite]] = None,
    ):
        self.users: Dict[str, User] = {user.id: user for user in users or []}
        self.courses: Dict[str, Course] = {
            course.id: course for course in courses or []
        }
        self.reviews: List[Review] = list(reviews or [])
        self.interactions: List[Interaction] = list(interactions or [])
        self.favorites: List[Favorite] = list(favorites or [])
        self.lock = threading.RLock()

    @classmethod
    def from_directory(cls, directory: str) -> "MemoryDataset":
        """Load CSV table exports from a directory"""
        users_df = _read_table(directory, "users", ["id", "email", "name"])
        courses_df = _read_table(
            directory,
            "courses",
            ["id", "course_code", "course_name", "department"],
        )
        instructors_df = _read_table(
            directory, "course_instructors", ["course_id", "instructor_id"]
        )
        tags_df = _read_table(directory, "course_tags", ["course_id", "tag_id"])
        reviews_df = _read_table(
            directory, "reviews", ["id", "user_id", "course_id", "status"]
        )
        interactions_df = _read_table(
            directory, "interactions", ["user_id", "course_id"]
        )
        favorites_df = _read_table(directory, "favorites", ["user_id", "course_id"])

        instructors_by_course = _group_column(
            instructors_df, "course_id", "instructor_id"
        )
        tags_by_course = _group_column(tags_df, "course_id", "tag_id")

        users = [
            User(id=row["id"], email=row["email"], name=_optional(row.get("name")))
            for row in users_df.to_dict("records")
        ]

        courses = [
            Course(
                id=row["id"],
                course_code=row["course_code"],
                course_name=row["course_name"],
                department=_optional(row.get("department")),
                year=int(row["year"]),
                term=int(row["term"]),
                credits=_optional_int(row.get("credits")),
                instructor_ids=instructors_by_course.get(row["id"], []),
                tag_ids=tags_by_course.get(row["id"], []),
            )
            for row in courses_df.to_dict("records")
        ]

        reviews = [
            Review(
                id=row["id"],
                user_id=row["user_id"],
                course_id=row["course_id"],
                coolness=_optional_int(row.get("coolness")),
                usefulness=_optional_int(row.get("usefulness")),
                grading=_optional_int(row.get("grading")),
                status=ReviewStatus(_optional(row.get("status")) or "ACTIVE"),
            )
            for row in reviews_df.to_dict("records")
        ]

        if not interactions_df.empty:
            interactions_df["created_at"] = pd.to_datetime(
                interactions_df["created_at"]
            )
        interactions = [
            Interaction(
                user_id=row["user_id"],
                course_id=row["course_id"],
                created_at=row["created_at"].to_pydatetime(),
            )
            for row in interactions_df.to_dict("records")
        ]

        favorites = [
            Favorite(user_id=row["user_id"], course_id=row["course_id"])
            for row in favorites_df.to_dict("records")
        ]

        logger.info(
            f"Loaded {len(courses)} courses, {len(reviews)} reviews and "
            f"{len(interactions)} interactions from {directory}"
        )
        return cls(users, courses, reviews, interactions, favorites)

    @classmethod
    def sample(cls) -> "MemoryDataset":
        """Small built-in catalog for development"""
        courses = [
            Course(
                id="c1",
                course_code="CS101",
                course_name="Introduction to Programming",
                department="Computer Science and Information Engineering",
                year=113,
                term=1,
                credits=3,
                instructor_ids=["i1"],
                tag_ids=["t-programming"],
            ),
            Course(
                id="c2",
                course_code="CS201",
                course_name="Data Structures",
                department="Computer Science and Information Engineering",
                year=113,
                term=2,
                credits=3,
                instructor_ids=["i1"],
                tag_ids=["t-programming", "t-algorithms"],
            ),
            Course(
                id="c3",
                course_code="IM210",
                course_name="Database Management",
                department="Information Management",
                year=112,
                term=2,
                credits=3,
                instructor_ids=["i2"],
                tag_ids=["t-databases"],
            ),
            Course(
                id="c4",
                course_code="EE150",
                course_name="Circuit Theory",
                department="Electrical Engineering",
                year=112,
                term=1,
                credits=3,
                instructor_ids=["i3"],
                tag_ids=["t-hardware"],
            ),
            Course(
                id="c5",
                course_code="GE100",
                course_name="Introduction to Film",
                department=None,
                year=111,
                term=2,
                credits=2,
                tag_ids=["t-arts"],
            ),
        ]
        users = [
            User(id="u1", email="C110151101@nkust.edu.tw", name="Sample Student"),
            User(id="u2", email="C111156203@nkust.edu.tw"),
        ]
        now = datetime.utcnow()
        interactions = [
            Interaction(user_id="u1", course_id="c1", created_at=now - timedelta(days=2)),
            Interaction(user_id="u2", course_id="c1", created_at=now - timedelta(days=1)),
            Interaction(user_id="u2", course_id="c3", created_at=now),
        ]
        reviews = [
            Review(id="r1", user_id="u1", course_id="c1", coolness=5, usefulness=4, grading=4),
            Review(id="r2", user_id="u2", course_id="c3", coolness=4, usefulness=5, grading=3),
            Review(id="r3", user_id="u2", course_id="c4", coolness=3, usefulness=4, grading=5),
        ]
        favorites = [Favorite(user_id="u1", course_id="c2")]
        return cls(users, courses, reviews, interactions, favorites)

    def active_reviews(self) -> List[Review]:
        return [r for r in self.reviews if r.status == ReviewStatus.ACTIVE]
