# storefront/api/errors.py
from contextlib import contextmanager

from fastapi import HTTPException
from pydantic import ValidationError
from requests import RequestException

from storefront.domain.order_status import InvalidTransitionError
from storefront.services.api_client import ApiError
from storefront.services.auth_service import NotAuthenticatedError
from storefront.services.order_service import OrderSubmissionError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def http_errors():
    """Service exceptions -> HTTP responses, same mapping for every view."""
    try:
        yield
    except NotAuthenticatedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except OrderSubmissionError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except ApiError as e:
        if e.status_code == 404:
            raise HTTPException(status_code=404, detail=e.message)
        if e.status_code in (401, 403):
            raise HTTPException(status_code=e.status_code, detail=e.message)
        if e.status_code is not None and 400 <= e.status_code < 500:
            raise HTTPException(status_code=400, detail=e.message)
        raise HTTPException(status_code=502, detail=e.message)
    except RequestException as e:
        logger.error(f"Storefront API unreachable: {e}")
        raise HTTPException(status_code=503, detail="Storefront API unreachable")
    except ValidationError as e:
        # remote payload we could not parse
        logger.error(f"Unexpected response from storefront API: {e}")
        raise HTTPException(status_code=502, detail="Unexpected response from storefront API")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
