"""
Schemas for the AI career features: ATS scoring, career roadmaps and the
interview question bank.

Each model doubles as the validation contract for the JSON the model is asked
to return, so field names follow the prompt templates exactly.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class SectionScores(BaseModel):
    contentSections: float = Field(ge=0, le=30)
    grammarLanguage: float = Field(ge=0, le=15)
    formattingStructure: float = Field(ge=0, le=25)
    atsOptimization: float = Field(ge=0, le=15)
    pageLength: float = Field(ge=0, le=5)
    linksContactInfo: float = Field(ge=0, le=10)


class ATSReport(BaseModel):
    overallScore: float = Field(ge=0, le=100)
    sectionScores: SectionScores
    doneRight: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    summary: str
    detectedSections: List[str] = Field(default_factory=list)
    missingSections: List[str] = Field(default_factory=list)
    keywordsFound: List[str] = Field(default_factory=list)
    pageCount: int = 1


class RoadmapStep(BaseModel):
    title: str
    subSteps: List[str] = Field(default_factory=list)


class CareerRoadmap(BaseModel):
    currentPosition: str
    targetPosition: str
    strategyOverview: str
    steps: List[RoadmapStep]
    skillsToDevelop: List[str] = Field(default_factory=list)
    longTermVision: List[str] = Field(default_factory=list)


class GeneratedQuestions(BaseModel):
    questions: List[str] = Field(min_length=5, max_length=5)


class ResponseAnalysis(BaseModel):
    clarity: float = Field(ge=0, le=10)
    structure: float = Field(ge=0, le=10)
    depth: float = Field(ge=0, le=10)
    responseSummary: str
    expectedAnswer: str


class RoleQuestionsRequest(BaseModel):
    jobRole: Optional[str] = None
    experience: Optional[str] = None


class AnalyzeResponseRequest(BaseModel):
    question: Optional[str] = None
    response: Optional[str] = None
