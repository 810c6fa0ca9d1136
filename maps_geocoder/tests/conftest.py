from maps_geocoder.tests.fixtures.geocoder import allowed_date_store, geocoder, make_response, mock_get
