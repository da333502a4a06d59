from fastapi import APIRouter, Depends, Request
from database import get_database
from models.base import Model
from models.student import students
from settings import Settings
from typings.student import Student, StudentUpdate
from util.registration import register_student
from util.response import Status, error, generate_response, success
from utils import get_app_settings, get_current_user, validate_object_id

router = APIRouter(prefix="/mhs", tags=["mhs"])


def get_students(database=Depends(get_database)) -> Model:
    return students(database)


@router.post("/create")
async def create_student(
    request: Request,
    payload: Student,
    model: Model = Depends(get_students),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register a student and issue an access token
    """
    record, token = await register_student(model, payload.model_dump(), settings)

    if token is None:
        return error(
            409,
            generate_response(
                Status.error,
                409,
                request.method,
                "Student already registered",
                data=record,
            ),
        )

    return success(
        201,
        generate_response(
            Status.ok,
            201,
            request.method,
            "Student registered",
            access_token=token,
        ),
    )


@router.get("/results")
async def read_students(request: Request, model: Model = Depends(get_students)):
    """
    List every student
    """
    result = await model.find_all()
    return success(
        200, generate_response(Status.ok, 200, request.method, "Students", data=result)
    )


@router.get("/result")
async def read_student(id: str, request: Request, model: Model = Depends(get_students)):
    """
    Get a student by id, `data` is null when there is no such student
    """
    result = await model.find_by_id(id)
    return success(
        200, generate_response(Status.ok, 200, request.method, "Student", data=result)
    )


@router.api_route("/update", methods=["POST", "PUT"])
async def update_student(
    request: Request,
    payload: StudentUpdate,
    model: Model = Depends(get_students),
    user=Depends(get_current_user),
):
    """
    Replace the given fields of a student
    """
    fields = payload.model_dump(exclude={"id"}, exclude_unset=True)
    result = await model.update({"_id": validate_object_id(payload.id)}, fields)
    return success(
        200,
        generate_response(Status.ok, 200, request.method, "Student updated", data=result),
    )


@router.delete("/delete")
async def delete_student(
    id: str,
    request: Request,
    model: Model = Depends(get_students),
    user=Depends(get_current_user),
):
    """
    Remove a student
    """
    result = await model.delete({"_id": validate_object_id(id)})
    return success(
        200,
        generate_response(Status.ok, 200, request.method, "Student deleted", data=result),
    )
