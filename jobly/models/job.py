from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text, CheckConstraint
from sqlalchemy.orm import relationship
from jobly.core.database import Base


class Job(Base):
    """
    Job posting owned by a company.

    equity is NUMERIC on PostgreSQL; SQLite has no exact decimal storage, so
    there the column holds the decimal text as given. It is read back as text.
    """
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("CAST(equity AS NUMERIC) <= 1", name="ck_jobs_equity"),
        # Never hand out a deleted job's id again
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, nullable=True)
    equity = Column(Numeric().with_variant(Text(), "sqlite"), nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    company = relationship("Company", back_populates="jobs")
    applications = relationship("Application", back_populates="job", passive_deletes=True)

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company_handle='{self.company_handle}')>"
