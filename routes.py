"""API Routes for expenses"""
import logging
from typing import Annotated, Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from models.expense import Expense
from services.errors import ExpenseNotFoundError, ExpenseValidationError, StoreError
from services.expenses_service import ExpenseService

router = APIRouter()
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Expense not found"


# --- Dependency Function ---
def get_expense_service(request: Request) -> ExpenseService:
    """Dependency returning the service object built at startup."""
    service = getattr(request.app.state, "expense_service", None)
    if service is None:
        logger.error("Expense service not found in application state. Check MongoDB connection.")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Database service not available.")
    return service


ExpenseServiceDep = Annotated[ExpenseService, Depends(get_expense_service)]


# --- API Routes ---

@router.get("/test", summary="Health Probe")
async def api_test() -> dict:
    return {"message": "API is working"}


@router.get("", response_model=List[Expense], summary="Get All Expenses", description="Retrieves all expense records, newest date first.")
@router.get("/", response_model=List[Expense], include_in_schema=False)
async def get_expenses(service: ExpenseServiceDep) -> List[Expense]:
    logger.info("GET /api/expenses endpoint called.")
    try:
        return await service.list_expenses()
    except StoreError as e:
        logger.error(f"Store error fetching expenses: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error fetching expenses: {e}")
        raise HTTPException(status_code=500, detail="An unexpected server error occurred while fetching expenses.")


@router.post("", response_model=Expense, status_code=status.HTTP_201_CREATED, summary="Add Expense")
@router.post("/", response_model=Expense, status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_expense(service: ExpenseServiceDep, payload: Annotated[Any, Body()] = None) -> Expense:
    logger.info("POST /api/expenses endpoint called.")
    try:
        return await service.create_expense(payload)
    except ExpenseValidationError as e:
        logger.warning(f"Rejected expense: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        logger.error(f"Store error creating expense: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error creating expense: {e}")
        raise HTTPException(status_code=500, detail="An unexpected server error occurred while creating the expense.")


@router.delete("/{expense_id}", summary="Delete Expense")
async def delete_expense(expense_id: str, service: ExpenseServiceDep) -> dict:
    logger.info(f"DELETE /api/expenses/{expense_id} endpoint called.")
    try:
        await service.delete_expense(expense_id)
    except ExpenseNotFoundError:
        logger.warning(f"Delete requested for unknown expense {expense_id}.")
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except StoreError as e:
        logger.error(f"Store error deleting expense {expense_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error deleting expense {expense_id}: {e}")
        raise HTTPException(status_code=500, detail="An unexpected server error occurred while deleting the expense.")
    return {"message": "Expense removed"}
