import pytest

from src.platform.exception.exceptions import ErrorType, ValidationError
from src.service.cinema.domain.entity.movie_entity import MovieEntity


@pytest.mark.unit
class TestMovieEntity:
    @pytest.fixture
    def movie(self) -> MovieEntity:
        return MovieEntity(
            id=1, title='Inception', genre='Sci-Fi', duration=148, rating=8.8, release_year=2010
        )

    def test_none_fields_keep_current_values(self, movie: MovieEntity) -> None:
        updated = movie.apply_changes(rating=9.1)

        assert updated.rating == 9.1
        assert (updated.title, updated.genre, updated.duration, updated.release_year) == (
            'Inception',
            'Sci-Fi',
            148,
            2010,
        )
        assert updated.id == 1

    def test_empty_genre_means_no_change(self, movie: MovieEntity) -> None:
        assert movie.apply_changes(genre='').genre == 'Sci-Fi'

    def test_case_only_title_change_is_not_a_rename(self, movie: MovieEntity) -> None:
        assert movie.is_renamed_by('INCEPTION') is False
        assert movie.apply_changes(title='INCEPTION').title == 'Inception'

    def test_rename(self, movie: MovieEntity) -> None:
        assert movie.is_renamed_by('Interstellar') is True
        assert movie.apply_changes(title='Interstellar').title_key == 'interstellar'

    def test_zero_values_are_applied(self, movie: MovieEntity) -> None:
        updated = movie.apply_changes(duration=0, rating=0.0, release_year=0)

        assert (updated.duration, updated.rating, updated.release_year) == (0, 0.0, 0)

    @pytest.mark.parametrize(
        ('changes', 'message'),
        [
            ({'duration': -1}, 'Duration cannot be negative'),
            ({'rating': 10.5}, 'Rating must be between 0 and 10'),
            ({'rating': -0.1}, 'Rating must be between 0 and 10'),
            ({'release_year': -2010}, 'ReleaseYear cannot be negative'),
        ],
    )
    def test_out_of_range_values_are_rejected(
        self, movie: MovieEntity, changes: dict, message: str
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            movie.apply_changes(**changes)

        assert exc_info.value.message == message
        assert exc_info.value.error_type == ErrorType.VALIDATION_ERROR
        assert exc_info.value.status_code == 400

    def test_original_is_untouched_by_rejected_change(self, movie: MovieEntity) -> None:
        with pytest.raises(ValidationError):
            movie.apply_changes(duration=-5)

        assert movie.duration == 148
