from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from apps.api.deps import get_db, get_file_store
from core.posts import create_post, list_posts
from core.schemas import PostOut
from core.storage import FileStore

router = APIRouter()


@router.post("", response_model=PostOut, status_code=201)
def upload_post(
    image: UploadFile | None = File(None),
    caption: str | None = Form(None),
    db: Session = Depends(get_db),
    store: FileStore = Depends(get_file_store),
):
    # an empty file input still arrives as a part with no filename
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="Image file is required")

    post = create_post(db, store, image=image.file, filename=image.filename, caption=caption)
    return PostOut.model_validate(post)


@router.get("", response_model=list[PostOut])
def get_posts(db: Session = Depends(get_db)):
    return [PostOut.model_validate(p) for p in list_posts(db)]
