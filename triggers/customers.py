"""
Customer Directory HTTP Triggers.

Routes:
    GET  /api/customers                     JSON array of all customers
    POST /api/customers                     create {name, email, phone?} -> 201 {id, partition}
    GET  /api/customers/{partition}/{id}    single customer or 404

Exports:
    CustomerListTrigger, CustomerCreateTrigger, CustomerGetTrigger
"""

import json
import uuid
from typing import Dict, Any, List

import azure.functions as func

from core.models import Customer, CustomerCreateRequest
from infrastructure.interface_repository import ICustomerRepository
from .http_base import BaseHttpTrigger


class CustomerListTrigger(BaseHttpTrigger):
    """
    Bare JSON array of customers.

    The body is a list, not the usual envelope, so handle_request is
    overridden; the request id still goes out in X-Request-ID.
    """

    def __init__(self, customer_repo: ICustomerRepository):
        super().__init__("customers_list")
        self.customer_repo = customer_repo

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        return {"items": self.list_items()}

    def list_items(self) -> List[Dict[str, Any]]:
        return [c.model_dump() for c in self.customer_repo.list_customers()]

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        request_id = self._generate_request_id()

        if req.method not in self.get_allowed_methods():
            return self._create_error_response(
                error="Method not allowed",
                message=f"Method {req.method} not allowed. Allowed: GET",
                status_code=405,
                request_id=request_id
            )

        try:
            items = self.list_items()
        except Exception as e:
            self.logger.error(f"💥 [{self.trigger_name}] Internal error: {e}")
            return self._create_error_response(
                error="Internal server error",
                message=str(e),
                status_code=500,
                request_id=request_id,
                include_debug_info=True
            )

        self.logger.info(f"✅ [{self.trigger_name}] Request {request_id} listed {len(items)} customers")
        return func.HttpResponse(
            json.dumps(items, default=str),
            status_code=200,
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


class CustomerCreateTrigger(BaseHttpTrigger):
    """Create a customer with a fresh uuid row key in the customer partition."""

    success_status_code = 201

    def __init__(self, customer_repo: ICustomerRepository, partition_key: str = "CUST"):
        super().__init__("customers_create")
        self.customer_repo = customer_repo
        self.partition_key = partition_key

    def get_allowed_methods(self) -> List[str]:
        return ["POST"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        body = self.extract_json_body(req, required=True)
        # ValidationError is a ValueError, so missing name/email maps to 400
        request = CustomerCreateRequest.model_validate(body)

        customer = Customer(
            id=str(uuid.uuid4()),
            partition=self.partition_key,
            name=request.name,
            email=request.email,
            phone=request.phone,
        )
        self.customer_repo.create_customer(customer)
        return {"id": customer.id, "partition": customer.partition}


class CustomerGetTrigger(BaseHttpTrigger):

    def __init__(self, customer_repo: ICustomerRepository):
        super().__init__("customers_get")
        self.customer_repo = customer_repo

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        params = self.extract_path_params(req, ["partition", "id"])
        customer = self.customer_repo.get_customer(params["partition"], params["id"])
        if customer is None:
            raise FileNotFoundError(f"Customer {params['partition']}/{params['id']} not found")
        return customer.model_dump()
