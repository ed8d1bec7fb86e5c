from app.schemas.documents import ResumeDoc, UserDoc


async def create_resume_record(user: UserDoc) -> ResumeDoc:
    """Record that `user` uploaded a resume; the file itself is not stored."""
    resume = ResumeDoc(userId=user.id, userEmail=user.email.lower())
    await resume.insert()
    return resume
