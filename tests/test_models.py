from datetime import date

import pytest

from academy.models import Batch
from academy.models.base import BaseModel


def test_batch_repr_uses_title(factory):
    assert repr(factory.batch(title='Weekend Maya')) == '<Batch Weekend Maya>'


def test_models_carry_no_serializer():
    assert not hasattr(BaseModel, 'to_dict')


def test_batch_rejects_end_before_start():
    with pytest.raises(ValueError):
        Batch(title='Backwards', start_date=date(2025, 4, 1), end_date=date(2025, 2, 1))
