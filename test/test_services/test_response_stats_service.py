import pytest
from datetime import datetime
from synccircle.models import Response, SpaceMember, Space, User
from synccircle.services.response_stats_service import ResponseStatsService

def _add_submission(session, form, user, answers, is_draft=False):
    response = Response(form_id=form.id, user_id=user.id, answers=answers, is_draft=is_draft,
                        submitted_at=datetime(2024, 5, 1))
    session.add(response)
    session.commit()
    return response

def _add_members(session, space, count):
    for index in range(count):
        user = User(username=f'extra{index}', email=f'extra{index}@example.com')
        user.set_password('password123')
        session.add(user)
        session.flush()
        session.add(SpaceMember(space_id=space.id, user_id=user.id))
    session.commit()

@pytest.mark.parametrize("responses,members,expected", [
    (2, 4, 50),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),  # 12.5 rounds half up
    (0, 5, 0),
    (3, 0, 0),
])
def test_completion_rate(responses, members, expected):
    assert ResponseStatsService.completion_rate(responses, members) == expected

def test_stats_for_four_members_two_responses(session, space, form, admin_user, member_user):
    _add_members(session, space, 2)
    _add_submission(session, form, admin_user, {'q1': 'a', 'q2': 4})
    _add_submission(session, form, member_user, {'q1': 'b', 'q2': 5})

    stats = ResponseStatsService.compute_stats(form, Response.query.all())

    assert stats['totalResponses'] == 2
    assert stats['memberCount'] == 4
    assert stats['completionRate'] == 50
    assert stats['averageRating'] == 4.5

def test_stats_ignore_drafts(session, form, admin_user, member_user):
    _add_submission(session, form, admin_user, {'q1': 'a', 'q2': 2})
    _add_submission(session, form, member_user, {'q1': 'b', 'q2': 5}, is_draft=True)

    stats = ResponseStatsService.compute_stats(form, Response.query.all())

    assert stats['totalResponses'] == 1
    assert stats['averageRating'] == 2.0

def test_stats_for_space_without_members(session, admin_user):
    space = Space(name='Empty', owner_id=admin_user.id)
    session.add(space)
    session.commit()

    from synccircle.models import Form
    form = Form(title='Lonely', space_id=space.id, created_by=admin_user.id, questions=[],
                frequency='monthly', send_time='10:00')
    session.add(form)
    session.commit()

    stats = ResponseStatsService.compute_stats(form, [])
    assert stats['completionRate'] == 0
    assert stats['totalResponses'] == 0
    assert 'averageRating' not in stats

def test_average_rating_omitted_without_numeric_answers(session, form, member_user):
    _add_submission(session, form, member_user, {'q1': 'text only', 'q3': 'Great'})

    stats = ResponseStatsService.compute_stats(form, Response.query.all())
    assert 'averageRating' not in stats

def test_average_rating_range_and_rounding(session, form, admin_user, member_user):
    # 0, 11 and booleans are outside the rating scale
    _add_submission(session, form, admin_user, {'q2': 1, 'x': 0, 'y': True, 'z': 11})
    _add_submission(session, form, member_user, {'q2': 2, 'w': 2})

    assert ResponseStatsService.average_rating(Response.query.all()) == 1.7

def test_question_summaries(session, form, admin_user, member_user):
    _add_submission(session, form, admin_user, {'q1': 'a', 'q2': 3, 'q3': 'Great'})
    _add_submission(session, form, member_user, {'q1': 'b', 'q2': 4, 'q3': ['Great', 'Rough']})

    summaries = {s['questionId']: s for s in ResponseStatsService.question_summaries(form, Response.query.all())}

    assert summaries['q1']['answered'] == 2
    assert summaries['q2']['averageRating'] == 3.5
    assert summaries['q3']['optionCounts'] == {'Great': 2, 'Okay': 0, 'Rough': 1}
    assert summaries['q4']['answered'] == 0
