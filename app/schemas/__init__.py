from .documents import UserDoc, ResumeDoc, ShortlistedJobDoc
from .JobSchemas import (
	ParsedResume,
	Coordinates,
	JobResult,
	UploadResumeData,
	ShortlistRequest,
	RemoveShortlistRequest,
	ShortlistedJobOut,
	APIResponse,
)
from .AccountSchemas import SignupRequest, LoginRequest, UserPublic, ResumeRecordOut, UserProfile
from .CareerSchemas import (
	SectionScores,
	ATSReport,
	RoadmapStep,
	CareerRoadmap,
	GeneratedQuestions,
	ResponseAnalysis,
	RoleQuestionsRequest,
	AnalyzeResponseRequest,
)

__all__ = [
	"UserDoc",
	"ResumeDoc",
	"ShortlistedJobDoc",
	"ParsedResume",
	"Coordinates",
	"JobResult",
	"UploadResumeData",
	"ShortlistRequest",
	"RemoveShortlistRequest",
	"ShortlistedJobOut",
	"APIResponse",
	"SignupRequest",
	"LoginRequest",
	"UserPublic",
	"ResumeRecordOut",
	"UserProfile",
	"SectionScores",
	"ATSReport",
	"RoadmapStep",
	"CareerRoadmap",
	"GeneratedQuestions",
	"ResponseAnalysis",
	"RoleQuestionsRequest",
	"AnalyzeResponseRequest",
]
