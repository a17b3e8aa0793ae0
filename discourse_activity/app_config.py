ENTRYPOINTS = [
    'discourse = discourse_activity.discourse:DiscourseXBlock',
]
