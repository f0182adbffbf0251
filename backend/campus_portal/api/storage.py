import mimetypes

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from campus_portal.core.security import Caller, get_current_caller
from campus_portal.services.storage_service import LocalObjectStore, get_object_store

router = APIRouter(prefix="/storage", tags=["storage"])


@router.put("/{bucket}/{object_path:path}", status_code=status.HTTP_201_CREATED)
async def upload_object(
    bucket: str,
    object_path: str,
    request: Request,
    caller: Caller = Depends(get_current_caller),
    store: LocalObjectStore = Depends(get_object_store),
):
    data = await request.body()
    await run_in_threadpool(store.put, caller.id, bucket, object_path, data)
    return {"bucket": bucket, "path": object_path, "size": len(data)}


@router.get("/{bucket}/{object_path:path}")
async def download_object(
    bucket: str,
    object_path: str,
    store: LocalObjectStore = Depends(get_object_store),
):
    data = await run_in_threadpool(store.get, bucket, object_path)
    media_type = mimetypes.guess_type(object_path)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)


@router.delete("/{bucket}/{object_path:path}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_object(
    bucket: str,
    object_path: str,
    caller: Caller = Depends(get_current_caller),
    store: LocalObjectStore = Depends(get_object_store),
):
    await run_in_threadpool(store.delete, caller.id, bucket, object_path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
