import sys

from openvidu_session.main import main

sys.exit(main())
