from pydantic import BaseModel


class CompanySuggestion(BaseModel):
    word: str
    score: int


class JobTitleSuggestion(BaseModel):
    title: str
    code: str
