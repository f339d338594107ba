# models/student.py
from pydantic import BaseModel

class StudentCreate(BaseModel):
    name: str
    email: str

class StudentUpdate(BaseModel):
    name: str
    email: str

class Student(BaseModel):
    id: str  # ObjectId as 24-char hex
    name: str
    email: str

    @classmethod
    def from_document(cls, doc: dict) -> "Student":
        return cls(id=str(doc["_id"]), name=doc.get("name") or "", email=doc.get("email") or "")
