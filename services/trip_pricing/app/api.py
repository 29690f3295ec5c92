from fastapi import APIRouter, Depends, HTTPException, status

from . import deps, schemas
from .errors import (
    CancellationError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)
from .models import TripRequest
from .route_service import RouteService

router = APIRouter()


@router.post("/trips/route", response_model=schemas.TripRouteResponse)
def compute_trip_route(
    data: schemas.TripRouteRequest,
    service: RouteService = Depends(deps.get_route_service),
) -> schemas.TripRouteResponse:
    trip = TripRequest(
        partida=data.partida,
        destino=data.destino,
        departure=data.data_partida,
    )
    try:
        result = service.compute_route(trip)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except UpstreamError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except CancellationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return schemas.TripRouteResponse(
        partida=trip.partida,
        destino=trip.destino,
        data_partida=trip.departure,
        **result.as_trip_fields(),
    )
