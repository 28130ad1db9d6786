import pytest

from academy.exceptions import ValidationError
from academy.services.candidate_records import BatchSoftware
from academy.services.software_matcher import (
    normalize_software_tokens, tokens_match, software_overlaps,
    resolve_candidate_software, match_students_by_software,
    match_batches_by_software, SoftwareMatcher
)

from conftest import FakeRepository, make_batch, make_student_record


def test_normalize_splits_trims_and_lowercases():
    assert normalize_software_tokens(" Photoshop ,Illustrator,, ") == ['photoshop', 'illustrator']


def test_normalize_accepts_lists_and_skips_non_strings():
    tokens = normalize_software_tokens(['Maya', 'Blender, ZBrush', None, 42, '  '])
    assert tokens == ['maya', 'blender', 'zbrush']


def test_normalize_empty_values():
    assert normalize_software_tokens(None) == []
    assert normalize_software_tokens('') == []
    assert normalize_software_tokens(' , ,') == []


def test_tokens_match_equality_and_containment():
    assert tokens_match('photoshop', 'photoshop')
    assert tokens_match('photoshop', 'photoshop cc')
    assert tokens_match('photoshop cc', 'photoshop')
    assert not tokens_match('maya', 'blender')


def test_matching_is_symmetric_across_case_and_whitespace():
    student = normalize_software_tokens(['Photoshop'])
    batch = normalize_software_tokens('photoshop, illustrator')
    assert software_overlaps(student, batch)
    assert software_overlaps(batch, student)

    assert software_overlaps(normalize_software_tokens('  PHOTOSHOP '), normalize_software_tokens('Photoshop'))


def test_short_names_over_match():
    # Loose matching on free text: "max" also hits "3ds max"
    assert software_overlaps(['max'], ['3ds max'])


def test_pending_batch_software_takes_priority():
    student = make_student_record(1, software=['Maya'], pending=['Photoshop'])
    assert resolve_candidate_software(student) == ['photoshop']


def test_profile_list_is_fallback_when_pending_empty():
    assert resolve_candidate_software(make_student_record(1, software=['Maya'], pending=[])) == ['maya']
    assert resolve_candidate_software(make_student_record(2, software=['Maya'], pending=None)) == ['maya']
    assert resolve_candidate_software(make_student_record(3)) == []


def test_match_students_ignores_inactive():
    students = [
        make_student_record(1, software=['Photoshop CC']),
        make_student_record(2, software=['Photoshop'], active=False),
        make_student_record(3, software=['Maya']),
    ]
    assert match_students_by_software(['photoshop'], students) == {1}


def test_match_batches_by_software():
    batches = [BatchSoftware(10, 'Photoshop, Illustrator'), BatchSoftware(11, 'Maya'), BatchSoftware(12, 'photoshop cc')]
    assert match_batches_by_software(['photoshop'], batches) == [10, 12]


def test_find_candidates_unions_profile_and_history_matches():
    repo = FakeRepository(
        students=[
            make_student_record(3, software=['Photoshop']),
            make_student_record(1, software=['Maya']),
            make_student_record(2),
        ],
        other_batches=[BatchSoftware(20, 'Photoshop CC'), BatchSoftware(21, 'Maya')],
        history={20: {1, 3}, 21: {2}},
    )

    candidates = SoftwareMatcher(repo).find_candidates(make_batch(software='Photoshop'))

    assert [c.id for c in candidates] == [1, 3]


def test_find_candidates_drops_history_students_who_are_not_active():
    repo = FakeRepository(
        students=[make_student_record(1, software=['Photoshop'])],
        other_batches=[BatchSoftware(20, 'Photoshop')],
        history={20: {1, 99}},
    )

    candidates = SoftwareMatcher(repo).find_candidates(make_batch())

    assert [c.id for c in candidates] == [1]


def test_find_candidates_empty_pool_is_not_an_error():
    repo = FakeRepository(students=[make_student_record(1, software=['Maya'])])
    assert SoftwareMatcher(repo).find_candidates(make_batch(software='ZZZ-nonexistent')) == []


def test_find_candidates_rejects_batch_without_tokens():
    with pytest.raises(ValidationError, match="no software"):
        SoftwareMatcher(FakeRepository()).find_candidates(make_batch(software=' , '))
