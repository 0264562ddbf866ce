"""
Measure category classification for campaign revisions.

The category is derived from which list fields a revision has filled:

| pre-fix talk | post-fix talk | deleted list | category        |
|--------------|---------------|--------------|-----------------|
| set          | set           | set          | 両方実施 (both)  |
| set          | set           | unset        | トーク改善       |
| any other    | any other     | set          | 不要データ削除   |
| otherwise    |               |              | その他           |

The "both" case is evaluated first so a revision with all three fields is
never reported as a pure talk improvement.
"""

from measure_effect.models.enums import MeasureCategory
from measure_effect.models.schemas import CampaignRevision


def classify_revision(revision: CampaignRevision) -> MeasureCategory:
    """
    Assign a measure category to a revision.

    Args:
        revision: Campaign revision record.

    Returns:
        MeasureCategory for the revision. Total over all field combinations.
    """
    has_talk_swap = bool(revision.pre_fix_talk_list_name and revision.post_fix_talk_list_name)
    has_deleted_list = bool(revision.deleted_list_name)

    if has_talk_swap and has_deleted_list:
        return MeasureCategory.BOTH
    if has_talk_swap:
        return MeasureCategory.TALK_IMPROVEMENT
    if has_deleted_list:
        return MeasureCategory.DATA_CLEANUP
    return MeasureCategory.OTHER


def has_talk_improvement(category: MeasureCategory) -> bool:
    """Whether the category includes a script before/after comparison."""
    return category in (MeasureCategory.TALK_IMPROVEMENT, MeasureCategory.BOTH)


def has_data_cleanup(category: MeasureCategory) -> bool:
    """Whether the category includes a list before/after comparison."""
    return category in (MeasureCategory.DATA_CLEANUP, MeasureCategory.BOTH)
