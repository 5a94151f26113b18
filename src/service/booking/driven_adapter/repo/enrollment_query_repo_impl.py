from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.booking.app.interface.i_enrollment_query_repo import IEnrollmentQueryRepo
from src.service.booking.domain.entity.enrollment_entity import Enrollment
from src.service.booking.driven_adapter.model.enrollment_model import EnrollmentModel


class EnrollmentQueryRepoImpl(IEnrollmentQueryRepo):
    def __init__(self, *, session: AsyncSession):
        self.session = session

    @Logger.io
    async def get_by_user_id(self, *, user_id: int) -> Optional[Enrollment]:
        result = await self.session.execute(
            select(EnrollmentModel).where(EnrollmentModel.user_id == user_id)
        )
        db_enrollment = result.scalar_one_or_none()

        if not db_enrollment:
            return None

        return Enrollment(
            id=db_enrollment.id,
            user_id=db_enrollment.user_id,
            name=db_enrollment.name,
            created_at=db_enrollment.created_at,
            updated_at=db_enrollment.updated_at,
        )
