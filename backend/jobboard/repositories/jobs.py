from sqlalchemy import or_
from sqlalchemy.orm import Session

from jobboard.models.job import Job
from jobboard.repositories.base import Repository


class JobRepository(Repository):
    model = Job
    label = "Job"

    def search(
        self,
        db: Session,
        location: str | None = None,
        employment_type: str | None = None,
        keyword: str | None = None,
    ) -> list[Job]:
        criteria = [Job.active.is_(True)]
        if location:
            criteria.append(Job.location.ilike(f"%{location}%"))
        if employment_type:
            criteria.append(Job.employment_type == employment_type)
        if keyword:
            criteria.append(or_(
                Job.title.ilike(f"%{keyword}%"),
                Job.description.ilike(f"%{keyword}%"),
            ))
        return self.find_by(db, *criteria, order_by=Job.posted_date.desc())

    def by_employer(self, db: Session, employer_id: str) -> list[Job]:
        return self.find_by(db, Job.employer_id == employer_id, order_by=Job.posted_date.desc())

    def by_ids(self, db: Session, ids) -> dict[str, Job]:
        ids = set(ids)
        if not ids:
            return {}
        return {j.id: j for j in self.find_by(db, Job.id.in_(ids))}


job_repository = JobRepository()
