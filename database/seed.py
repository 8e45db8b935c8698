"""
Seed data script for the Learner Grades system.
Creates sample data for testing and demonstration.
"""
import random

from database import (
    get_database, init_db,
    Learner, Grade, Score, Campus,
    LEARNERS_COLLECTION, GRADES_COLLECTION,
)

SCORE_TYPES = ["exam", "quiz", "homework", "homework"]


def seed_database(db=None, seed: int = 42):
    """Populate database with sample data."""
    db = db if db is not None else get_database()
    rng = random.Random(seed)

    learners = db[LEARNERS_COLLECTION]
    grades = db[GRADES_COLLECTION]

    # Clear existing data
    learners.delete_many({})
    grades.delete_many({})

    valid_learners = [
        Learner(name="Ada Lovelace", enrolled=True, year=2019, campus=Campus.REMOTE),
        Learner(name="Grace Hopper", enrolled=True, year=2021, avg=88.5, campus=Campus.BOSTON),
        Learner(name="Alan Turing", enrolled=False, year=2016, campus=Campus.NEW_YORK),
        Learner(name="Edsger Dijkstra", enrolled=True, year=2022, campus=Campus.SEATTLE),
        Learner(name="Barbara Liskov", enrolled=True, year=2020, avg=74.0, campus=Campus.DALLAS),
    ]
    learners.insert_many([l.to_document() for l in valid_learners])

    # Records the validity checker is expected to report
    invalid_learners = [
        {"name": "No Campus", "enrolled": True, "year": 2020},
        {"name": "Too Early", "enrolled": True, "year": 1990, "campus": "Denver"},
        {"name": "Wrong Campus", "enrolled": False, "year": 2018, "campus": "Chicago"},
        {"enrolled": True, "year": 2001, "campus": "Los Angeles"},
    ]
    learners.insert_many(invalid_learners)

    grade_records = []
    for class_id in (101, 204, 300):
        for learner_id in range(len(valid_learners)):
            grade = Grade(
                class_id=class_id,
                learner_id=learner_id,
                scores=[
                    Score(type=score_type, score=round(rng.uniform(40, 100), 2))
                    for score_type in SCORE_TYPES
                ],
            )
            grade_records.append(grade.to_document())
    grades.insert_many(grade_records)

    print("Database seeded successfully!")
    print(f"Created:")
    print(f"  - {len(valid_learners)} valid learners")
    print(f"  - {len(invalid_learners)} invalid learners")
    print(f"  - {len(grade_records)} grade records")


if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Seeding database...")
    seed_database()
