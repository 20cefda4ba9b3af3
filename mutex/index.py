import logging

from fastapi import Depends, FastAPI, File, Form, Header, HTTPException, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from supabase import Client, create_client

from mutex.config import configure_logging, get_settings
from mutex.export import DEFAULT_FILENAME, workbook_bytes
from mutex.parsers import parse_bank_statement
from mutex.pdf_text import (
    IncorrectPasswordError,
    PasswordRequiredError,
    PdfDecodeError,
    extract_document_text,
    open_document,
)

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_supabase() -> Client:
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        raise HTTPException(
            status_code=500,
            detail="Supabase environment variables not configured"
        )

    return create_client(settings.supabase_url, settings.supabase_key)


async def verify_token(
    authorization: str = Header(...),
    supabase: Client = Depends(get_supabase)
):
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid token format")

    token = authorization.split(" ", 1)[1]

    try:
        user = supabase.auth.get_user(token)
    except Exception:
        # Supabase raises on an invalid or expired token
        logger.info("Rejected token")
        raise HTTPException(status_code=401, detail="user unauthorized")
    if not user:
        raise HTTPException(status_code=401, detail="user unauthorized")
    return user


def extract_statement(file_content: bytes, password: str = None) -> dict:
    """
    Decrypt, read and parse one statement. PyMuPDF and the parser are
    CPU-bound, so the endpoints run this in the threadpool.
    """
    try:
        doc = open_document(file_content, password)
    except PasswordRequiredError as e:
        # Case: PDF is locked, but NO password was sent
        raise HTTPException(status_code=400, detail={"message": str(e), "needs_password": True})
    except IncorrectPasswordError as e:
        raise HTTPException(status_code=401, detail={"message": str(e), "needs_password": True})
    except PdfDecodeError as e:
        raise HTTPException(status_code=400, detail={"message": str(e), "needs_password": False})

    try:
        text_output = extract_document_text(doc)
    finally:
        doc.close()

    return parse_bank_statement(text_output)


async def _convert(file: UploadFile, password: str) -> dict:
    if file.content_type != "application/pdf":
        raise HTTPException(status_code=400, detail="File must be a PDF")

    file_content = await file.read()
    if len(file_content) > get_settings().max_upload_bytes:
        raise HTTPException(status_code=400, detail="File is too large")

    result = await run_in_threadpool(extract_statement, file_content, password)
    logger.info(
        "Converted %s: bank=%s transactions=%d",
        file.filename, result["bank"], len(result["transactions"]),
    )
    return result


@app.get("/")
def home():
    return {"message": "Mutex PDF Converter API is Running!"}


@app.post("/api/v1/convert")
async def convert_pdf(
    file: UploadFile = File(...),
    password: str = Form(None),
    user=Depends(verify_token)
):
    try:
        return await _convert(file, password)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error processing %s", file.filename)
        raise HTTPException(status_code=500, detail=f"Error processing PDF: {repr(e)}")


@app.post("/api/v1/convert/xlsx")
async def convert_pdf_to_xlsx(
    file: UploadFile = File(...),
    password: str = Form(None),
    user=Depends(verify_token)
):
    try:
        result = await _convert(file, password)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Error processing %s", file.filename)
        raise HTTPException(status_code=500, detail=f"Error processing PDF: {repr(e)}")

    return Response(
        content=await run_in_threadpool(workbook_bytes, result["transactions"]),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{DEFAULT_FILENAME}"'},
    )
