from setuptools import find_packages, setup

package_name = 'waypoint_recorder'

setup(
    name=package_name,
    version='0.0.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        ('share/' + package_name + '/launch', [
            'launch/waypoint_recorder.launch.py',
        ]),
        ('share/' + package_name + '/config', [
            'config/waypoint_recorder.yaml',
        ]),
    ],
    install_requires=[
        'setuptools',
        'numpy',
    ],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='waypoint_recorder',
    maintainer_email='waypoint_recorder@todo.todo',
    description='Records editable navigation waypoints from the localization pose and saves them to CSV',
    license='MIT',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            'waypoint_generator = waypoint_recorder.waypoint_generator:main',
            'waypoint_saver = waypoint_recorder.waypoint_saver:main',
        ],
    },
)
