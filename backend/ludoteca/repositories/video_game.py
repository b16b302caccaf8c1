"""Repositório de VideoGame."""

from ludoteca.models.video_game import VideoGame
from ludoteca.repositories.base import Repository


class VideoGameRepository(Repository[VideoGame]):
    model = VideoGame
