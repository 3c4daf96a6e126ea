# API Route Constants

# Movie routes: GET /all, POST '', POST /update/{title}, DELETE /{title}
MOVIE_BASE = '/movies'
MOVIE_CREATE = MOVIE_BASE

# Showtime routes: GET /{id}, POST '', POST /update/{id}, DELETE /{id}
SHOWTIME_BASE = '/showtimes'
SHOWTIME_CREATE = SHOWTIME_BASE

# Booking routes
BOOKING_BASE = '/bookings'
BOOKING_CREATE = BOOKING_BASE
