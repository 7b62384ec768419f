# API Route Constants

# Base API
API_BASE = '/api'

# Reservation routes
RESERVATION_BASE = f'{API_BASE}/reservation'
RESERVATION_AVAILABILITY = f'{RESERVATION_BASE}/availability'

# Movie routes
MOVIE_BASE = f'{API_BASE}/movie'
MOVIE_RESERVATION_NEW = f'{MOVIE_BASE}/{{movie_id}}/reservation/new'
MOVIE_SCHEDULE_SHEETS = f'{MOVIE_BASE}/{{movie_id}}/schedule/{{schedule_id}}/sheets'

# System routes
HEALTH = '/health'
