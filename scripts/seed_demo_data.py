"""
Seed a demo team, a few questions and one published position.

Run after migrations. Safe to re-run: nothing is created twice.

Usage:
    python scripts/seed_demo_data.py
"""

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from recruit.db.session import get_async_session_context
from recruit.models.question import Question
from recruit.models.team import Team
from recruit.schemas.position import PositionCreate, PositionQuestionCreate
from recruit.schemas.question import QuestionCreate
from recruit.services.position_service import PositionService
from recruit.services.question_service import QuestionService
from recruit.utils.time import utc_now

DEMO_QUESTIONS = [
    QuestionCreate(
        question="Why would you like to volunteer with us?",
        short_name="motivation",
        question_type="text",
        required_by_default=True,
    ),
    QuestionCreate(
        question="When can you start?",
        short_name="start_date",
        question_type="date_time",
    ),
    QuestionCreate(
        question="Which days are you available?",
        short_name="availability",
        question_type="check_boxes",
        editable_metadata="Monday\nTuesday\nWednesday\nThursday\nFriday",
    ),
    QuestionCreate(
        question="How did you hear about us?",
        short_name="referral",
        question_type="select",
        hint="Pick the closest match",
        editable_metadata="A friend\nSocial media\nOur website\nOther",
    ),
]


async def get_or_create_team(db: AsyncSession, name: str) -> Team:
    result = await db.execute(select(Team).where(Team.name == name))
    team = result.scalar_one_or_none()
    if team:
        print(f"[SKIP] Team {name} already exists")
        return team
    team = Team(name=name)
    db.add(team)
    await db.flush()
    print(f"[OK] Created team {name}")
    return team


async def get_or_create_question(db: AsyncSession, data: QuestionCreate) -> Question:
    result = await db.execute(select(Question).where(Question.short_name == data.short_name))
    question = result.scalar_one_or_none()
    if question:
        print(f"[SKIP] Question {data.short_name} already exists")
        return question
    question = await QuestionService(db).create_question(data)
    print(f"[OK] Created question {question.short_name} ({question.human_question_type})")
    return question


async def seed_demo_data() -> None:
    async with get_async_session_context() as db:
        team = await get_or_create_team(db, "Outreach")
        questions = [await get_or_create_question(db, data) for data in DEMO_QUESTIONS]

        service = PositionService(db)
        position = await service.get_position("marketing-monkey")
        if position:
            print(f"[SKIP] Position {position.slug} already exists")
            return

        now = utc_now()
        position = await service.create_position(
            PositionCreate(
                team_id=team.id,
                title="Marketing Monkey",
                short_description="Help us spread the word about our work.",
                general_description="We are a small, friendly team of volunteers.",
                position_description="Write posts for our social media channels.\n\n* Two posts a week\n* Reply to comments",
                applicant_description="You enjoy writing and know your way around **social media**.",
                duration="3 months",
                time_commitment="2_hours",
                published_at=now,
                expires_at=now + timedelta(days=60),
                contact_emails=["jobs@example.com"],
            )
        )
        print(f"[OK] Created position {position.slug}")

        for question in questions:
            attached = await service.attach_question(position, PositionQuestionCreate(question_id=question.id))
            print(f"[OK] Attached {question.short_name} at {attached.order_position}")


if __name__ == "__main__":
    print("Seeding demo data...\n")
    asyncio.run(seed_demo_data())
    print("\n[OK] Done.")
