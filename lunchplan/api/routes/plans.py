from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Response

from lunchplan.api.deps import Identity, get_identity, get_meals, get_plans
from lunchplan.infra.Meal_Repository import MealRepository
from lunchplan.infra.Plan_Repository import PlanRepository
from lunchplan.infra.pdf_utils import generate_pdf_for_shopping_list
from lunchplan.logic import planning
from lunchplan.logic.shopping.list_builder import build_shopping_list
from lunchplan.logic.validation import validate_date

router = APIRouter(prefix="/api/plans", tags=["plans"])


async def _shopping_list(user_id, plans, meals, start_date, end_date):
    if start_date and end_date:
        validate_date(start_date, "startDate")
        validate_date(end_date, "endDate")
    return await build_shopping_list(plans, meals, user_id, start_date, end_date)


@router.get("")
async def get_meal_plan(start_date: Optional[str] = Query(default=None, alias="startDate"),
                        end_date: Optional[str] = Query(default=None, alias="endDate"),
                        identity: Identity = Depends(get_identity),
                        plans: PlanRepository = Depends(get_plans)):
    days = await planning.list_plan_days(plans, identity.user_id, start_date, end_date)
    return {"planDays": [d.to_dict() for d in days]}


@router.delete("")
async def clear_plan(identity: Identity = Depends(get_identity),
                     plans: PlanRepository = Depends(get_plans)):
    removed = await plans.clear_all(identity.user_id)
    return {"message": "Meal plan cleared successfully", "deleted": removed}


@router.get("/shopping-list")
async def get_shopping_list(start_date: Optional[str] = Query(default=None, alias="startDate"),
                            end_date: Optional[str] = Query(default=None, alias="endDate"),
                            identity: Identity = Depends(get_identity),
                            plans: PlanRepository = Depends(get_plans),
                            meals: MealRepository = Depends(get_meals)):
    items = await _shopping_list(identity.user_id, plans, meals, start_date, end_date)
    return {"shoppingList": [i.to_dict() for i in items], "count": len(items)}


@router.get("/shopping-list/pdf")
async def export_shopping_list_pdf(start_date: Optional[str] = Query(default=None, alias="startDate"),
                                   end_date: Optional[str] = Query(default=None, alias="endDate"),
                                   identity: Identity = Depends(get_identity),
                                   plans: PlanRepository = Depends(get_plans),
                                   meals: MealRepository = Depends(get_meals)):
    items = await _shopping_list(identity.user_id, plans, meals, start_date, end_date)
    pdf_bytes = generate_pdf_for_shopping_list(items, start_date, end_date)
    filename = f"shopping_list_{start_date}_{end_date}.pdf" if start_date and end_date else "shopping_list.pdf"
    return Response(content=pdf_bytes, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})


@router.get("/{date}")
async def get_plan_day(date: str,
                       identity: Identity = Depends(get_identity),
                       plans: PlanRepository = Depends(get_plans)):
    day = await planning.get_plan_day(plans, identity.user_id, date)
    return {"planDay": day.to_dict()}


@router.put("/{date}")
async def update_plan_day(date: str, payload: dict = Body(...),
                          identity: Identity = Depends(get_identity),
                          plans: PlanRepository = Depends(get_plans),
                          meals: MealRepository = Depends(get_meals)):
    day = await planning.set_plan_day(plans, meals, identity.user_id, date, payload)
    return {"message": "Meal plan updated successfully", "planDay": day.to_dict()}


@router.delete("/{date}")
async def delete_plan_day(date: str,
                          identity: Identity = Depends(get_identity),
                          plans: PlanRepository = Depends(get_plans)):
    await planning.delete_plan_day(plans, identity.user_id, date)
    return {"message": "Plan day deleted successfully"}
