from .place_lookup import Place, PlaceLookup, NOMINATIM_URL
