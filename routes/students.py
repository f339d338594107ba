# routes/students.py
from fastapi import APIRouter, HTTPException, Depends, Response
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError
from bson import ObjectId
from typing import List
from models.student import Student, StudentCreate, StudentUpdate
from database import get_students_collection, object_id_or_nil
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/students", tags=["students"])

@router.post("", response_model=Student, status_code=201)
async def add_student(student: StudentCreate, collection: AsyncIOMotorCollection = Depends(get_students_collection)):
    student_dict = student.dict()
    student_dict["_id"] = ObjectId()
    try:
        await collection.insert_one(student_dict)
    except PyMongoError as e:
        logger.error(f"Failed to insert student: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Student added: {student_dict['_id']}")
    return Student.from_document(student_dict)

@router.get("", response_model=List[Student])
async def get_students(collection: AsyncIOMotorCollection = Depends(get_students_collection)):
    try:
        students = []
        async for doc in collection.find({}):
            students.append(Student.from_document(doc))
        return students
    except PyMongoError as e:
        logger.error(f"Failed to list students: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/{id}", response_model=Student)
async def get_student(id: str, collection: AsyncIOMotorCollection = Depends(get_students_collection)):
    # Malformed ids and failed lookups both surface as not found
    try:
        doc = await collection.find_one({"_id": object_id_or_nil(id)})
    except PyMongoError as e:
        logger.error(f"Lookup of student {id} failed: {str(e)}")
        doc = None
    if doc is None:
        logger.warning(f"Student not found: {id}")
        raise HTTPException(status_code=404, detail="Student not found")
    return Student.from_document(doc)

@router.put("/{id}", response_model=StudentUpdate)
async def update_student(id: str, student: StudentUpdate, collection: AsyncIOMotorCollection = Depends(get_students_collection)):
    student_dict = student.dict()
    try:
        await collection.update_one({"_id": object_id_or_nil(id)}, {"$set": student_dict})
    except PyMongoError as e:
        logger.error(f"Failed to update student {id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Student updated: {id}")
    return student_dict

@router.delete("/{id}", status_code=204)
async def delete_student(id: str, collection: AsyncIOMotorCollection = Depends(get_students_collection)):
    try:
        await collection.delete_one({"_id": object_id_or_nil(id)})
    except PyMongoError as e:
        logger.error(f"Failed to delete student {id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
    logger.info(f"Student deleted: {id}")
    return Response(status_code=204)
