"""Picture routes: binary content instead of JSON records."""

from __future__ import annotations

from typing import Annotated
from typing import Any
from typing import List
from typing import Optional

from fastapi import APIRouter
from fastapi import Depends
from fastapi import File
from fastapi import Path
from fastapi import Response
from fastapi import UploadFile
from fastapi import status

from ..adapter import facade_dependency
from ..controller import Controller
from ..controller import InputException
from ..controller import handle_exceptions
from ..controller import process_result
from ..entities import Picture
from ..entities import PictureRef
from ..facade import PictureFacade
from ..schemas import INTEGER_MAX
from ..schemas import INTEGER_MIN
from ..security import get_current_account
from ..status import StatusCode


PICTURE_MEDIA_TYPE = "image/jpg"
PICTURE_DISPOSITION = 'inline; filename="picture.jpg"'

get_picture_facade = facade_dependency(PictureFacade)

PictureId = Annotated[int, Path(ge=INTEGER_MIN, le=INTEGER_MAX)]

router = APIRouter(
    prefix="/catalog/pictures",
    tags=["pictures"],
    dependencies=[Depends(get_current_account)],
)


class PictureController(Controller):
    """Adapter between the picture routes and the picture facade."""

    @handle_exceptions
    async def list_ids(self, facade: Any) -> List[int]:
        pictures = process_result(await facade.get_all(), required=True)
        return [picture.id for picture in pictures]

    @handle_exceptions
    async def get_content(self, facade: Any, picture_id: int) -> bytes:
        picture = process_result(await facade.get(picture_id))
        if picture is None:
            raise InputException(
                "PICTURE_NOT_EXIST", "Picture doesn't exist.", StatusCode.NOT_FOUND
            )
        return picture.content

    @handle_exceptions
    async def add(self, facade: Any, content: Optional[bytes]) -> None:
        if content is None:
            raise InputException("FILE_NULL", "File mustn't be null.")
        if not content:
            raise InputException("FILE_EMPTY", "File mustn't be empty.")
        process_result(await facade.add(Picture(content=content)))

    @handle_exceptions
    async def remove(self, facade: Any, picture_id: int) -> None:
        process_result(await facade.remove(PictureRef(id=picture_id)))

    @handle_exceptions
    async def move_up(self, facade: Any, picture_id: int) -> None:
        process_result(await facade.move_up(PictureRef(id=picture_id)))

    @handle_exceptions
    async def move_down(self, facade: Any, picture_id: int) -> None:
        process_result(await facade.move_down(PictureRef(id=picture_id)))

    @handle_exceptions
    async def update_positions(self, facade: Any) -> None:
        process_result(await facade.update_positions())

    @handle_exceptions
    async def new_data(self, facade: Any) -> None:
        process_result(await facade.new_data())


controller = PictureController()


@router.get("", response_model=List[int])
async def get_pictures(facade: Any = Depends(get_picture_facade)) -> List[int]:
    """Return the ids of all pictures in position order."""

    return await controller.list_ids(facade)


@router.post("/new", status_code=status.HTTP_204_NO_CONTENT)
async def new_data(facade: Any = Depends(get_picture_facade)) -> None:
    await controller.new_data(facade)


@router.post("/updatePositions", status_code=status.HTTP_204_NO_CONTENT)
async def update_positions(facade: Any = Depends(get_picture_facade)) -> None:
    await controller.update_positions(facade)


@router.get(
    "/{id}",
    response_class=Response,
    responses={200: {"content": {PICTURE_MEDIA_TYPE: {}}}},
)
async def get_picture(id: PictureId, facade: Any = Depends(get_picture_facade)) -> Response:
    """Return the raw picture content."""

    content = await controller.get_content(facade, id)
    return Response(
        content=content,
        media_type=PICTURE_MEDIA_TYPE,
        headers={"Content-Disposition": PICTURE_DISPOSITION},
    )


@router.put("/add", status_code=status.HTTP_201_CREATED)
async def add_picture(
    file: Optional[UploadFile] = File(None),
    facade: Any = Depends(get_picture_facade),
) -> None:
    """Store an uploaded picture at the end of the collection."""

    content = None if file is None else await file.read()
    await controller.add(facade, content)


@router.delete("/remove/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_picture(id: PictureId, facade: Any = Depends(get_picture_facade)) -> None:
    await controller.remove(facade, id)


@router.post("/moveUp/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def move_up(id: PictureId, facade: Any = Depends(get_picture_facade)) -> None:
    await controller.move_up(facade, id)


@router.post("/moveDown/{id}", status_code=status.HTTP_204_NO_CONTENT)
async def move_down(id: PictureId, facade: Any = Depends(get_picture_facade)) -> None:
    await controller.move_down(facade, id)


__all__ = ["PictureController", "get_picture_facade", "router"]
