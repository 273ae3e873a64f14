from __future__ import annotations

from typing import Any, Dict, List, Optional

from twapi.client import Engine
from twapi.contract import IDPath
from twapi.mcp.tools._common import ack, dump, present
from twapi.projects import company


async def create_company(
    engine: Engine,
    name: str,
    address_one: Optional[str] = None,
    address_two: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    zip: Optional[str] = None,
    country_code: Optional[str] = None,
    phone: Optional[str] = None,
    fax: Optional[str] = None,
    email_one: Optional[str] = None,
    website: Optional[str] = None,
    profile: Optional[str] = None,
    manager_id: Optional[int] = None,
    industry_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """
    Create a company (client) in Teamwork.com.

    Companies group users and own projects. ``country_code`` is the ISO 3166
    two-letter code; ``manager_id`` is the user managing the client.
    """
    req = company.CompanyCreateRequest(
        name=name,
        **present(
            address_one=address_one,
            address_two=address_two,
            city=city,
            state=state,
            zip=zip,
            country_code=country_code,
            phone=phone,
            fax=fax,
            email_one=email_one,
            website=website,
            profile=profile,
            client_managed_by=manager_id,
            industry_category_id=industry_id,
            tag_ids=tag_ids,
        ),
    )
    resp = await company.company_create(engine, req)
    return ack("Company created successfully", id=resp.created_id())


async def update_company(
    engine: Engine,
    company_id: int,
    name: Optional[str] = None,
    address_one: Optional[str] = None,
    address_two: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    zip: Optional[str] = None,
    country_code: Optional[str] = None,
    phone: Optional[str] = None,
    fax: Optional[str] = None,
    email_one: Optional[str] = None,
    website: Optional[str] = None,
    profile: Optional[str] = None,
    manager_id: Optional[int] = None,
    industry_id: Optional[int] = None,
    tag_ids: Optional[List[int]] = None,
) -> Dict[str, Any]:
    """Update an existing company; only the provided fields change."""
    req = company.CompanyUpdateRequest(
        path=IDPath(id=company_id),
        **present(
            name=name,
            address_one=address_one,
            address_two=address_two,
            city=city,
            state=state,
            zip=zip,
            country_code=country_code,
            phone=phone,
            fax=fax,
            email_one=email_one,
            website=website,
            profile=profile,
            client_managed_by=manager_id,
            industry_category_id=industry_id,
            tag_ids=tag_ids,
        ),
    )
    await company.company_update(engine, req)
    return ack("Company updated successfully", id=company_id)


async def delete_company(engine: Engine, company_id: int) -> Dict[str, Any]:
    await company.company_delete(engine, company.CompanyDeleteRequest.new(company_id))
    return ack("Company deleted successfully", id=company_id)


async def get_company(engine: Engine, company_id: int) -> Dict[str, Any]:
    resp = await company.company_get(engine, company.CompanyGetRequest.new(company_id))
    return dump(resp)


async def list_companies(
    engine: Engine,
    search_term: Optional[str] = None,
    tag_ids: Optional[List[int]] = None,
    match_all_tags: Optional[bool] = None,
    page: int = 1,
    page_size: int = 50,
) -> Dict[str, Any]:
    """List companies, optionally filtered by name or project tags."""
    filters = company.CompanyListFilters(
        page=page,
        page_size=page_size,
        **present(
            search_term=search_term,
            project_tag_ids=tag_ids,
            match_all_project_tags=match_all_tags,
        ),
    )
    resp = await company.company_list(
        engine, company.CompanyListRequest(filters=filters)
    )
    return dump(resp)
